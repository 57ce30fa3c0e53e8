"""
optdesc - declare command-line options with one-line description strings.

This package compiles option descriptions such as ``*:include,I=string:include
path`` into option specifications, matches argument vectors against them with
getopt-style long options, short option clusters and ``--``, and stores the
typed values in a key/value store. It also renders usage text for the declared
options.
"""

import logging

from .commandline import CommandLine
from .description import ArgumentKind, OptionSpec, ValueType, compile_description
from .errors import (
    AmbiguousOption,
    CommandLineError,
    DescriptionWarning,
    DuplicateOption,
    MalformedDescription,
    MissingArgument,
    MissingRequiredOption,
    ParseError,
    TypeMismatch,
    UnexpectedArgument,
    UnknownOption,
)
from .matcher import ParseSession, match_arguments
from .settings import ParserSettings
from .store import ConfigSet, ConfigStore
from .table import OptionTable
from .usage import format_usage, write_usage

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "CommandLine",
    "ArgumentKind",
    "OptionSpec",
    "ValueType",
    "compile_description",
    "AmbiguousOption",
    "CommandLineError",
    "DescriptionWarning",
    "DuplicateOption",
    "MalformedDescription",
    "MissingArgument",
    "MissingRequiredOption",
    "ParseError",
    "TypeMismatch",
    "UnexpectedArgument",
    "UnknownOption",
    "ParseSession",
    "match_arguments",
    "ParserSettings",
    "ConfigSet",
    "ConfigStore",
    "OptionTable",
    "format_usage",
    "write_usage",
]
