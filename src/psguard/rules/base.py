"""Rule protocol for psguard lint rules."""
from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from psguard.diagnostics import Diagnostic
from psguard.language import ScriptNode
from psguard.types import RuleOptions


@runtime_checkable
class Rule(Protocol):
    """Structural interface for lint rules.

    ``check`` receives the root of a parsed script, the rule's option bag
    and, when the script came from disk, its path. It returns the rule's
    diagnostics; an empty list means the script passes.
    """

    @property
    def name(self) -> str: ...

    def check(
        self,
        *,
        node: ScriptNode,
        options: RuleOptions | None = None,
        path: Path | str | None = None,
    ) -> list[Diagnostic]: ...
