"""psguard - top-level directive checks for PowerShell scripts."""
from __future__ import annotations

from psguard.constants import __version__

__all__ = ["__version__"]
