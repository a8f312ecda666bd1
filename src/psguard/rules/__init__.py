"""Lint rules bundled with psguard."""
from __future__ import annotations

from psguard.rules.error_action import ErrorActionStopRule
from psguard.rules.strict_mode import StrictModeVersionRule

__all__ = ["ErrorActionStopRule", "StrictModeVersionRule"]
