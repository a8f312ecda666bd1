"""Diagnostic data model for psguard."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from psguard.constants import Severity
from psguard.language.extent import ScriptExtent


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single rule violation found in a script.

    ``extent`` is the span the diagnostic points at. For a missing directive
    this is the whole document (the root node's extent). ``file`` is absent
    for in-memory analysis. ``suggested_corrections`` is reserved for rules
    that offer a fix; none of the bundled rules do.
    """

    message: str
    extent: ScriptExtent
    rule_name: str
    severity: Severity
    file: Path | None = None
    suggested_corrections: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the record shape consumed by host tooling."""
        return {
            "message": self.message,
            "extent": {
                "startLine": self.extent.start_line,
                "startColumn": self.extent.start_column,
                "endLine": self.extent.end_line,
                "endColumn": self.extent.end_column,
                "startOffset": self.extent.start_offset,
                "endOffset": self.extent.end_offset,
            },
            "ruleId": self.rule_name,
            "severity": self.severity.name.title(),
            "path": str(self.file) if self.file is not None else None,
            "fix": list(self.suggested_corrections) if self.suggested_corrections else None,
        }
