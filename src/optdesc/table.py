"""
The ordered, immutable set of options a command line accepts.
"""

import logging
from typing import Iterable, Iterator, Optional, Union

from result import Err, Ok, Result

from .description import OptionSpec, compile_description
from .errors import DuplicateOption, MalformedDescription

logger = logging.getLogger(__name__)


class OptionTable:
    """
    Compiled option specifications in declaration order.

    Long and short names are unique within a table; this is checked when the
    table is built. Tables are read-only once built and may be shared between
    any number of parses.

    Example:
        table = OptionTable.from_descriptions([
            "*:include,I=string:include path",
            ":verbose,v:be verbose",
        ])
        table.find_short("I").config_key  # 'include'
    """

    __slots__ = ("_options", "_by_long", "_by_short")

    def __init__(self, options: Iterable[OptionSpec] = ()) -> None:
        """
        Build a table from already compiled specifications.

        Raises:
            DuplicateOption: If two specifications share a long or short name.
        """
        self._options: tuple[OptionSpec, ...] = tuple(options)
        self._by_long: dict[str, OptionSpec] = {}
        self._by_short: dict[str, OptionSpec] = {}
        for spec in self._options:
            if spec.long_name in self._by_long:
                raise DuplicateOption(
                    f"--{spec.long_name}",
                    self._by_long[spec.long_name].description,
                    spec.description,
                )
            self._by_long[spec.long_name] = spec
            if spec.short_name is not None:
                if spec.short_name in self._by_short:
                    raise DuplicateOption(
                        f"-{spec.short_name}",
                        self._by_short[spec.short_name].description,
                        spec.description,
                    )
                self._by_short[spec.short_name] = spec

    @classmethod
    def build(
        cls, descriptions: Iterable[str]
    ) -> Result["OptionTable", Union[MalformedDescription, DuplicateOption]]:
        """
        Compile every description and assemble them into a table.

        Args:
            descriptions: Option description strings, in declaration order.

        Returns:
            Result[OptionTable, MalformedDescription | DuplicateOption]:
                - Ok with the table,
                - Err with the first description or duplicate error found.
        """
        specs = []
        for description in descriptions:
            compiled = compile_description(description)
            if isinstance(compiled, Err):
                return compiled
            specs.append(compiled.unwrap())
        try:
            table = cls(specs)
        except DuplicateOption as e:
            return Err(e)
        logger.debug("Built option table with %d options", len(table))
        return Ok(table)

    @classmethod
    def from_descriptions(cls, descriptions: Iterable[str]) -> "OptionTable":
        """
        Like build(), but raises the error instead of returning it.

        Raises:
            MalformedDescription: If a description does not compile.
            DuplicateOption: If two descriptions share a long or short name.
        """
        built = cls.build(descriptions)
        if isinstance(built, Err):
            raise built.unwrap_err()
        return built.unwrap()

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __getitem__(self, index: int) -> OptionSpec:
        return self._options[index]

    def __repr__(self) -> str:
        names = ", ".join(f"--{spec.long_name}" for spec in self._options)
        return f"OptionTable({names})"

    def find_long(self, name: str) -> Optional[OptionSpec]:
        return self._by_long.get(name)

    def find_short(self, name: str) -> Optional[OptionSpec]:
        return self._by_short.get(name)

    def options_starting_with(self, prefix: str) -> list[OptionSpec]:
        """Options whose long name begins with ``prefix``, in declaration order."""
        return [spec for spec in self._options if spec.long_name.startswith(prefix)]

    def long_names_starting_with(self, prefix: str) -> list[str]:
        return [spec.long_name for spec in self.options_starting_with(prefix)]
