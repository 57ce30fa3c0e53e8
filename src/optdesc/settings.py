"""Settings controlling how an argument vector is matched."""

import dataclasses
import os
from typing import Mapping, Optional


@dataclasses.dataclass(frozen=True)
class ParserSettings:
    """
    Matching behaviour that is not part of the option descriptions.

    Attributes:
        allow_abbreviations: Accept any unambiguous prefix of a long option
            name ('--verb' for '--verbose'). An exact name always wins.
        stop_at_first_positional: End option processing at the first
            positional argument, POSIX style. That argument and everything
            after it are left over.
    """

    allow_abbreviations: bool = False
    stop_at_first_positional: bool = False

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: bool
    ) -> "ParserSettings":
        """
        Settings honouring the POSIXLY_CORRECT environment variable.

        Args:
            environ: The environment to read, ``os.environ`` when omitted.
            **overrides: Explicit field values, taking precedence over the environment.
        """
        environ = os.environ if environ is None else environ
        values = {"stop_at_first_positional": "POSIXLY_CORRECT" in environ}
        values.update(overrides)
        return cls(**values)
