"""Constants and enums for psguard."""
from __future__ import annotations

from enum import Enum
from typing import Final

__version__: Final[str] = "0.1.0"


class Severity(Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"


STRICT_MODE_RULE: Final[str] = "StrictModeVersionRule"
ERROR_ACTION_RULE: Final[str] = "ErrorActionStopRule"

RULE_NAMES: Final[frozenset[str]] = frozenset({
    STRICT_MODE_RULE,   # Set-StrictMode -Version 3 at top level
    ERROR_ACTION_RULE,  # $ErrorActionPreference = 'Stop' at top level
})

SYNTAX_ERROR_RULE: Final[str] = "ScriptSyntaxError"

STRICT_MODE_COMMAND: Final[str] = "Set-StrictMode"
ERROR_ACTION_VARIABLE: Final[str] = "ErrorActionPreference"
ERROR_ACTION_VALUE: Final[str] = "Stop"

# Token fallback lookahead windows, counted in tokens.
STRICT_MODE_LOOKAHEAD: Final[int] = 6
ERROR_ACTION_LOOKAHEAD: Final[int] = 8

SCRIPT_SUFFIXES: Final[frozenset[str]] = frozenset({".ps1", ".psm1"})
