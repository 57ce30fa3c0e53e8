"""Help text rendering for an option table."""

import sys
from typing import Optional, TextIO

from .description import ArgumentKind, OptionSpec
from .table import OptionTable

MAX_NAMES_WIDTH = 30


def _format_names(spec: OptionSpec) -> str:
    short = f"-{spec.short_name}, " if spec.short_name else "    "
    hint = ""
    if spec.argument_kind is ArgumentKind.REQUIRED:
        hint = f"={spec.value_type.metavar}"
    elif spec.argument_kind is ArgumentKind.OPTIONAL:
        hint = f"[={spec.value_type.metavar}]"
    return f"{short}--{spec.long_name}{hint}"


def _format_description(spec: OptionSpec) -> str:
    """Append default, required and repeat markers to the help text."""
    notes = []
    if spec.is_required:
        notes.append("required")
    if spec.has_default and not spec.is_required:
        notes.append(f"default: {spec.default_value}")
    if spec.is_multiple:
        notes.append("may be repeated")
    suffix = f"({', '.join(notes)})" if notes else ""
    if spec.help_text and suffix:
        return f"{spec.help_text} {suffix}"
    return spec.help_text or suffix


def format_usage(table: OptionTable, banner: str = "") -> str:
    """
    Render the banner followed by one entry per option, in declaration order.

    Names wider than MAX_NAMES_WIDTH push their help text to the next line.
    """
    rows = [(_format_names(spec), _format_description(spec)) for spec in table]
    width = max((len(names) for names, _ in rows if len(names) <= MAX_NAMES_WIDTH), default=0)

    lines = []
    if banner:
        lines.append(banner)
        lines.append("")
    if rows:
        lines.append("Options:")
    for names, description in rows:
        if not description:
            lines.append(f"  {names}")
        elif len(names) > MAX_NAMES_WIDTH:
            lines.append(f"  {names}")
            lines.append(f"  {'':{width}}  {description}")
        else:
            lines.append(f"  {names:{width}}  {description}")
    return "\n".join(lines) + "\n"


def write_usage(
    table: OptionTable, banner: str = "", out: Optional[TextIO] = None
) -> None:
    """Write format_usage() output to ``out``, standard output by default."""
    (out or sys.stdout).write(format_usage(table, banner))
