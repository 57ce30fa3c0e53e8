"""
CommandLine - parse command-line options declared with description strings.

This module ties the pieces together: the option descriptions are compiled
into an OptionTable once, and every call to parse() matches an argument vector
against that table, writing option values to a ConfigSet (or any other
ConfigStore) and keeping the leftover positional arguments.
"""

import sys
from typing import Iterable, Optional, TextIO, Union

from result import Err, Ok, Result

from .errors import CommandLineError, DuplicateOption, MalformedDescription
from .matcher import match_arguments
from .settings import ParserSettings
from .store import ConfigSet, ConfigStore
from .table import OptionTable
from .usage import format_usage, write_usage


class CommandLine:
    """
    A command-line parser built from option description strings.

    Example:
        cmdline = CommandLine(
            [
                "*:include,I=string:include path",
                ":verbose,v:be verbose",
                ":max-count,m=int,10:stop after NUM matches",
            ],
            banner="usage: grep [OPTIONS] PATTERN [FILE...]",
        )
        config = cmdline.parse(["-I", "/a", "--include=/b", "-v", "file.txt"])
        config.get_list("include")  # ['/a', '/b']
        config.get_int("max-count")  # 10
        cmdline.remaining()  # ['file.txt']
    """

    def __init__(
        self,
        descriptions: Union[Iterable[str], OptionTable],
        banner: str = "",
        settings: Optional[ParserSettings] = None,
    ) -> None:
        """
        Compile the option descriptions.

        Args:
            descriptions: Option description strings, or an already built OptionTable.
            banner: First line of the usage text.
            settings: Matching behaviour, defaults to ParserSettings().

        Raises:
            MalformedDescription: If a description does not compile.
            DuplicateOption: If two descriptions share a long or short name.
        """
        if isinstance(descriptions, OptionTable):
            self.options = descriptions
        else:
            self.options = OptionTable.from_descriptions(descriptions)
        self.banner = banner
        self.settings = settings or ParserSettings()
        self._remaining: list[str] = []

    @classmethod
    def from_descriptions(
        cls,
        descriptions: Iterable[str],
        banner: str = "",
        settings: Optional[ParserSettings] = None,
    ) -> Result["CommandLine", Union[MalformedDescription, DuplicateOption]]:
        """Build a CommandLine, returning description errors instead of raising them."""
        built = OptionTable.build(descriptions)
        if isinstance(built, Err):
            return built
        return Ok(cls(built.unwrap(), banner=banner, settings=settings))

    def set_banner(self, banner: str) -> None:
        """Sets the first line to appear in usage()."""
        self.banner = banner

    def parse(
        self,
        args: Optional[list[str]] = None,
        store: Optional[ConfigStore] = None,
    ) -> ConfigStore:
        """
        Parse command-line arguments into ``store``.

        Args:
            args (Optional[list[str]]): Arguments to parse, without the program
                name. If None, uses sys.argv[1:].
            store (Optional[ConfigStore]): Receives the option values. A new
                ConfigSet is created when omitted.

        Returns:
            ConfigStore: The store holding the option values.

        Raises:
            ParseError: If the arguments do not match the declared options.
        """
        outcome = self.safe_parse(args, store)
        if isinstance(outcome, Err):
            raise outcome.unwrap_err()
        return outcome.unwrap()

    def safe_parse(
        self,
        args: Optional[list[str]] = None,
        store: Optional[ConfigStore] = None,
    ) -> Result[ConfigStore, CommandLineError]:
        """
        Safely parse command-line arguments into ``store``.

        Args:
            args (Optional[list[str]]): Arguments to parse. If None, uses sys.argv[1:].
            store (Optional[ConfigStore]): Receives the option values.
        Returns:
            Result[ConfigStore, CommandLineError]:
                - Ok with the store holding the option values,
                - Err with the first error found. remaining() is left
                  unchanged in that case.
        """
        if args is None:
            args = sys.argv[1:]
        if store is None:
            store = ConfigSet()

        matched = match_arguments(args, self.options, store, self.settings)
        if isinstance(matched, Err):
            return matched
        self._remaining = matched.unwrap()
        return Ok(store)

    def remaining(self) -> list[str]:
        """
        Positional arguments left over by the last successful parse(), in order.
        """
        return list(self._remaining)

    def usage(self, out: Optional[TextIO] = None) -> None:
        """Writes the help message to ``out``, standard output by default."""
        write_usage(self.options, self.banner, out)

    def __str__(self) -> str:
        return format_usage(self.options, self.banner)
