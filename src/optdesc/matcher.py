"""
Argument vector matching.

Tokens are classified left to right:

- ``--`` ends option processing, every later token is positional;
- ``--name`` and ``--name=value`` are long options;
- ``-abc`` is a cluster of short options. When a short option takes an
  argument, the rest of the cluster is its inline value (``-Ipath``);
- anything else, including a lone ``-``, is positional.

A mandatory argument that is not given inline is taken from the next token,
whatever that token looks like. Optional arguments are only ever inline.
"""

import logging
from enum import Enum
from typing import Any, Iterable, Optional

from result import Err, Ok, Result

from .description import ArgumentKind, OptionSpec
from .errors import (
    AmbiguousOption,
    MissingArgument,
    MissingRequiredOption,
    ParseError,
    TypeMismatch,
    UnexpectedArgument,
    UnknownOption,
)
from .settings import ParserSettings
from .store import ConfigStore
from .table import OptionTable

logger = logging.getLogger(__name__)

END_OF_OPTIONS = "--"


class SessionState(Enum):
    SCANNING = "scanning"
    EXPECTING_ARGUMENT = "expecting-argument"
    AFTER_END_MARKER = "after-end-marker"


class ParseSession:
    """
    The state of one pass over an argument vector.

    A session writes matched values to ``store`` as it goes and collects
    leftover positional arguments in ``remaining``. Create a new session
    for every vector; sessions are not reusable.
    """

    def __init__(
        self,
        table: OptionTable,
        store: ConfigStore,
        settings: Optional[ParserSettings] = None,
    ) -> None:
        self.table = table
        self.store = store
        self.settings = settings or ParserSettings()
        self.position = 0
        self.matched: set[str] = set()
        self.remaining: list[str] = []
        self._pending: Optional[tuple[OptionSpec, str]] = None
        self._ended = False

    @property
    def state(self) -> SessionState:
        if self._ended:
            return SessionState.AFTER_END_MARKER
        if self._pending is not None:
            return SessionState.EXPECTING_ARGUMENT
        return SessionState.SCANNING

    def run(self, argv: Iterable[str]) -> list[str]:
        """
        Match every token of ``argv``, then apply defaults and check required options.

        Returns:
            list[str]: The leftover positional arguments, in order.

        Raises:
            ParseError: On the first invalid token, or when required options
                are missing once the whole vector was read.
        """
        for token in argv:
            self.feed(token)
            self.position += 1
        self.finish()
        return self.remaining

    def feed(self, token: str) -> None:
        """Process a single token."""
        if self._ended:
            self.remaining.append(token)
        elif self._pending is not None:
            spec, typed = self._pending
            self._pending = None
            self._store(spec, typed, token)
        elif token == END_OF_OPTIONS:
            self._ended = True
        elif token.startswith("--"):
            self._match_long(token[2:])
        elif token.startswith("-") and token != "-":
            self._match_short_cluster(token[1:])
        else:
            self.remaining.append(token)
            if self.settings.stop_at_first_positional:
                self._ended = True

    def finish(self) -> None:
        """Apply defaults of absent options and check required options."""
        if self._pending is not None:
            raise MissingArgument(self._pending[1])

        for spec in self.table:
            if not spec.fills_when_absent:
                continue
            if spec.config_key in self.matched or self.store.has(spec.config_key):
                continue
            logger.debug(
                "Option --%s not given, using default %r", spec.long_name, spec.default_value
            )
            self._store(spec, f"--{spec.long_name}", spec.default_value)

        missing = [
            spec.long_name
            for spec in self.table
            if spec.is_required and not self.store.has(spec.config_key)
        ]
        if missing:
            raise MissingRequiredOption(missing)
        logger.debug("Leftover arguments: %r", self.remaining)

    def _resolve_long(self, name: str) -> OptionSpec:
        typed = f"--{name}"
        spec = self.table.find_long(name) if name else None
        if spec is not None:
            return spec
        if name and self.settings.allow_abbreviations:
            candidates = self.table.options_starting_with(name)
            if len(candidates) > 1:
                raise AmbiguousOption(typed, [option.long_name for option in candidates])
            if candidates:
                return candidates[0]
        raise UnknownOption(typed)

    def _match_long(self, body: str) -> None:
        name, separator, inline = body.partition("=")
        spec = self._resolve_long(name)
        self._consume(spec, f"--{name}", inline if separator else None)

    def _match_short_cluster(self, body: str) -> None:
        for index, char in enumerate(body):
            spec = self.table.find_short(char)
            if spec is None:
                raise UnknownOption(f"-{char}")
            if spec.has_argument:
                rest = body[index + 1 :]
                self._consume(spec, f"-{char}", rest or None)
                return
            self._consume(spec, f"-{char}", None)

    def _consume(self, spec: OptionSpec, typed: str, inline: Optional[str]) -> None:
        if spec.argument_kind is ArgumentKind.NONE:
            if inline is not None:
                raise UnexpectedArgument(typed, inline)
            self._store(spec, typed, None)
        elif spec.argument_kind is ArgumentKind.REQUIRED:
            if inline is not None:
                self._store(spec, typed, inline)
            else:
                self._pending = (spec, typed)
        else:
            self._store(spec, typed, inline if inline is not None else spec.default_value)

    def _store(self, spec: OptionSpec, typed: str, text: Optional[str]) -> None:
        value: Any = True
        if text is not None:
            try:
                value = spec.convert_argument(text)
            except ValueError:
                raise TypeMismatch(typed, text, spec.value_type.value) from None

        if spec.is_multiple:
            self.store.append_to_list(spec.config_key, value)
        else:
            self.store.set_scalar(spec.config_key, value)
        self.matched.add(spec.config_key)
        logger.debug(
            "Matched %s at position %d: %s = %r", typed, self.position, spec.config_key, value
        )


def match_arguments(
    argv: Iterable[str],
    table: OptionTable,
    store: ConfigStore,
    settings: Optional[ParserSettings] = None,
) -> Result[list[str], ParseError]:
    """
    Match an argument vector against an option table.

    Args:
        argv: The arguments, without the program name.
        table: The options to recognize.
        store: Receives the value of every matched option.
        settings: Matching behaviour, defaults to ParserSettings().

    Returns:
        Result[list[str], ParseError]:
            - Ok with the leftover positional arguments,
            - Err with the first error found. Values matched before the
              error stay in ``store``.
    """
    session = ParseSession(table, store, settings)
    try:
        remaining = session.run(argv)
    except ParseError as e:
        logger.debug("Argument matching failed: %s", e)
        return Err(e)
    return Ok(remaining)
