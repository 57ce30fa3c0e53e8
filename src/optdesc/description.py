"""
Option description compiler.

An option is declared with a one-line description string:

    [!][*][config_key]:long_name[,short_name][=value_type[,default]|?value_type,default][:help]

where value_type is one of ``int``, ``bool`` or ``string``.

- ``!`` makes the option required, ``*`` makes repeated occurrences accumulate
  into a list. Both may be given, in any order, at most once each.
- ``config_key`` defaults to ``long_name``.
- ``=value_type`` declares a mandatory argument. A trailing ``,default`` is
  stored when the option does not appear on the command line at all.
- ``?value_type,default`` declares an optional argument; ``default`` is used
  when the option is given without an inline value.
- Without ``=`` or ``?`` the option takes no argument and stores ``True``.

Examples:
    ``:help,h:display this help and exit``
    ``:max-count,m=int:stop after NUM matches``
    ``*:include,I=string:include path``
"""

import dataclasses
import logging
import re
import warnings
from enum import Enum
from typing import Any, Optional

from result import Err, Ok, Result

from .errors import DescriptionWarning, MalformedDescription

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

TRUE_LITERALS = ("True", "true", "1")
FALSE_LITERALS = ("False", "false", "0")


def _strict_bool(value: str) -> bool:
    """
    Parse a string to a boolean value strictly.

    Only accepts 'True', 'true', 'False', 'false', '1', '0' as valid values.
    Raises ValueError for any other string.
    """
    if value in TRUE_LITERALS:
        return True
    elif value in FALSE_LITERALS:
        return False
    else:
        raise ValueError(
            f"Invalid boolean value: '{value}'. Must be one of: True, true, False, false, 1, 0"
        )


def _strict_int(value: str) -> int:
    """Parse a base-10 signed integer, rejecting whitespace and underscores."""
    if not _INTEGER_PATTERN.fullmatch(value):
        raise ValueError(f"Invalid integer value: '{value}'")
    return int(value)


class ArgumentKind(Enum):
    """Whether an option takes an argument, and whether it may be omitted."""

    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"


class ValueType(Enum):
    """How the text of an option argument is validated and converted."""

    UNTYPED = ""
    INTEGER = "int"
    BOOLEAN = "bool"
    STRING = "string"

    @classmethod
    def from_name(cls, name: str) -> Optional["ValueType"]:
        """Return the value type declared as ``name`` in a description, if any."""
        for member in cls:
            if member is not cls.UNTYPED and member.value == name:
                return member
        return None

    @property
    def metavar(self) -> str:
        return {
            ValueType.UNTYPED: "",
            ValueType.INTEGER: "INT",
            ValueType.BOOLEAN: "BOOL",
            ValueType.STRING: "STRING",
        }[self]

    def convert(self, text: str) -> Any:
        """
        Convert an argument text to the Python value stored for this type.

        Raises:
            ValueError: If ``text`` is not a valid spelling for this type.
        """
        if self is ValueType.INTEGER:
            return _strict_int(text)
        if self is ValueType.BOOLEAN:
            return _strict_bool(text)
        if self is ValueType.STRING:
            return text
        raise ValueError("Options without an argument do not take a value")

    def check(self, text: str) -> bool:
        """Return True if ``text`` is a valid spelling for this type."""
        try:
            self.convert(text)
        except ValueError:
            return False
        return True


@dataclasses.dataclass(frozen=True)
class OptionSpec:
    """
    A compiled option description.

    ``default_value`` is None when the description declares no default.
    """

    config_key: str
    long_name: str
    short_name: Optional[str] = None
    help_text: str = ""
    argument_kind: ArgumentKind = ArgumentKind.NONE
    value_type: ValueType = ValueType.UNTYPED
    default_value: Optional[str] = None
    is_multiple: bool = False
    is_required: bool = False
    description: str = dataclasses.field(default="", compare=False)

    @classmethod
    def from_description(cls, description: str) -> "OptionSpec":
        """
        Compile a description string, raising on failure.

        Raises:
            MalformedDescription: If ``description`` does not follow the grammar.
        """
        outcome = compile_description(description)
        if isinstance(outcome, Err):
            raise outcome.unwrap_err()
        return outcome.unwrap()

    @property
    def has_argument(self) -> bool:
        return self.argument_kind is not ArgumentKind.NONE

    @property
    def is_argument_optional(self) -> bool:
        return self.argument_kind is ArgumentKind.OPTIONAL

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    @property
    def fills_when_absent(self) -> bool:
        """True if the default is stored when the option never appears."""
        return (
            self.argument_kind is ArgumentKind.REQUIRED
            and self.has_default
            and not self.is_required
        )

    def check_argument(self, value: str) -> bool:
        """Checks that ``value`` is a valid argument text for this option."""
        return self.has_argument and self.value_type.check(value)

    def convert_argument(self, value: str) -> Any:
        """Convert an argument text to its stored value, raising ValueError if invalid."""
        return self.value_type.convert(value)


def _read_until(text: str, start: int, stops: str) -> tuple[str, int]:
    """Return the text from ``start`` up to the first stop character and its index."""
    end = start
    while end < len(text) and text[end] not in stops:
        end += 1
    return text[start:end], end


def _compile(description: str) -> OptionSpec:
    def malformed(reason: str) -> MalformedDescription:
        return MalformedDescription(description, reason)

    is_required = False
    is_multiple = False
    pos = 0
    while pos < len(description) and description[pos] in "!*":
        marker = description[pos]
        if marker == "!":
            if is_required:
                raise malformed("'!' is given more than once")
            is_required = True
        else:
            if is_multiple:
                raise malformed("'*' is given more than once")
            is_multiple = True
        pos += 1

    config_key, pos = _read_until(description, pos, ":")
    if pos == len(description):
        raise malformed("expected ':' before the long option name")
    for token in "!*,=?":
        if token in config_key:
            raise malformed(f"unexpected '{token}' in config key '{config_key}'")
    pos += 1

    long_name, pos = _read_until(description, pos, ",=?:")
    if not long_name:
        raise malformed("the long option name is empty")
    if long_name.startswith("-"):
        raise malformed(f"long option name '{long_name}' must not start with '-'")

    short_name = None
    if pos < len(description) and description[pos] == ",":
        short_name, pos = _read_until(description, pos + 1, "=?:")
        if len(short_name) != 1:
            raise malformed(
                f"short option name '{short_name}' must be exactly one character"
            )
        if short_name == "-":
            raise malformed("'-' cannot be used as a short option name")

    argument_kind = ArgumentKind.NONE
    value_type = ValueType.UNTYPED
    default_value = None
    if pos < len(description) and description[pos] in "=?":
        marker = description[pos]
        argument_kind = ArgumentKind.REQUIRED if marker == "=" else ArgumentKind.OPTIONAL
        type_name, pos = _read_until(description, pos + 1, ",:")
        if not type_name:
            raise malformed(f"missing value type after '{marker}'")
        declared = ValueType.from_name(type_name)
        if declared is None:
            raise malformed(
                f"unknown value type '{type_name}', expected one of: int, bool, string"
            )
        value_type = declared
        if pos < len(description) and description[pos] == ",":
            default_value, pos = _read_until(description, pos + 1, ":")
        elif argument_kind is ArgumentKind.OPTIONAL:
            raise malformed(
                f"optional argument '?{type_name}' needs a default value ('?{type_name},default')"
            )

    help_text = ""
    if pos < len(description):
        help_text = description[pos + 1 :]

    if is_required and argument_kind is ArgumentKind.REQUIRED and default_value is not None:
        warnings.warn(
            f"Option '--{long_name}' is required, so its default '{default_value}' "
            "is never used",
            DescriptionWarning,
            stacklevel=3,
        )

    return OptionSpec(
        config_key=config_key or long_name,
        long_name=long_name,
        short_name=short_name,
        help_text=help_text,
        argument_kind=argument_kind,
        value_type=value_type,
        default_value=default_value,
        is_multiple=is_multiple,
        is_required=is_required,
        description=description,
    )


def compile_description(description: str) -> Result[OptionSpec, MalformedDescription]:
    """
    Compile one option description string.

    Args:
        description (str): The description, see the module documentation for its syntax.

    Returns:
        Result[OptionSpec, MalformedDescription]:
            - Ok with the compiled specification,
            - Err with the MalformedDescription explaining what is wrong.
    """
    try:
        spec = _compile(description)
    except MalformedDescription as e:
        logger.debug("Rejected option description %r: %s", description, e.reason)
        return Err(e)
    logger.debug("Compiled option description %r into %r", description, spec)
    return Ok(spec)
