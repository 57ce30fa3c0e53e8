"""
Errors and warnings raised while compiling option descriptions and while
matching an argument vector against them.

Every error derives from CommandLineError so front ends can catch the whole
family at once, or pick the few they want to recover from (UnknownOption, for
instance) and let the rest propagate.
"""

from typing import Optional, Sequence


class CommandLineError(Exception):
    """Base class of every error raised by optdesc."""


class MalformedDescription(CommandLineError, ValueError):
    """
    An option description string does not follow the description grammar.

    Attributes:
        source: The complete description string that failed to compile.
        reason: Human-readable explanation naming the offending fragment.
    """

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(source, reason)
        self.source = source
        self.reason = reason

    def __str__(self) -> str:
        return f"Malformed option description '{self.source}': {self.reason}"


class DuplicateOption(CommandLineError, ValueError):
    """Two descriptions of one option table declare the same long or short name."""

    def __init__(self, name: str, first: str, second: str) -> None:
        super().__init__(name, first, second)
        self.name = name
        self.first = first
        self.second = second

    def __str__(self) -> str:
        return (
            f"Option '{self.name}' is declared twice: "
            f"'{self.first}' and '{self.second}'"
        )


class ParseError(CommandLineError):
    """
    Base class for errors found in an argument vector.

    Attributes:
        option: The option as the user typed it (e.g. '--output' or '-o'),
            or None when the error is not tied to a single token.
    """

    def __init__(self, option: Optional[str], *args: object) -> None:
        super().__init__(option, *args)
        self.option = option


class UnknownOption(ParseError):
    def __str__(self) -> str:
        return f"Unknown option: {self.option}"


class AmbiguousOption(ParseError):
    def __init__(self, option: str, candidates: Sequence[str]) -> None:
        super().__init__(option, tuple(candidates))
        self.candidates = tuple(candidates)

    def __str__(self) -> str:
        names = ", ".join(f"--{name}" for name in self.candidates)
        return f"Ambiguous option: {self.option} (could be {names})"


class MissingArgument(ParseError):
    def __str__(self) -> str:
        return f"Option {self.option} requires an argument"


class UnexpectedArgument(ParseError):
    def __init__(self, option: str, value: str) -> None:
        super().__init__(option, value)
        self.value = value

    def __str__(self) -> str:
        return (
            f"Option {self.option} does not take an argument, "
            f"but '{self.value}' was given"
        )


class TypeMismatch(ParseError):
    """An argument text failed the validation of the option's value type."""

    def __init__(self, option: str, value: str, value_type: str) -> None:
        super().__init__(option, value, value_type)
        self.value = value
        self.value_type = value_type

    def __str__(self) -> str:
        return (
            f"Invalid {self.value_type} value for option {self.option}: "
            f"'{self.value}'"
        )


class MissingRequiredOption(ParseError):
    """
    One or more required options never received a value.

    Attributes:
        options: Long names of every missing required option, in declaration
            order. ``option`` holds the first one.
    """

    def __init__(self, options: Sequence[str]) -> None:
        super().__init__(f"--{options[0]}", tuple(options))
        self.options = tuple(options)

    def __str__(self) -> str:
        names = ", ".join(f"--{name}" for name in self.options)
        return f"Missing required options: {names}"


class DescriptionWarning(UserWarning):
    """A description compiled, but carries a combination that has no effect."""


__all__ = [
    "CommandLineError",
    "MalformedDescription",
    "DuplicateOption",
    "ParseError",
    "UnknownOption",
    "AmbiguousOption",
    "MissingArgument",
    "UnexpectedArgument",
    "TypeMismatch",
    "MissingRequiredOption",
    "DescriptionWarning",
]
