"""Rule documentation catalog for psguard explain command."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from psguard.constants import ERROR_ACTION_RULE, STRICT_MODE_RULE


@dataclass(frozen=True, slots=True)
class RuleInfo:
    name: str
    title: str
    description: str
    bad_example: str
    good_example: str
    limitations: str


RULE_CATALOG: Final[dict[str, RuleInfo]] = {
    STRICT_MODE_RULE: RuleInfo(
        name=STRICT_MODE_RULE,
        title="Strict Mode Version 3",
        description=(
            "Scripts must call Set-StrictMode with version 3 (3, 3.0, 3.1, ...)\n"
            "at the top level. Strict mode turns references to unset variables\n"
            "and non-existent properties into errors. A call that only appears\n"
            "inside a function, class or script block does not count."
        ),
        bad_example="Set-StrictMode -Version 2.0",
        good_example="Set-StrictMode -Version 3.0",
        limitations=(
            "The token fallback inspects at most 6 tokens after the command\n"
            "name and stops at the end of the statement: a newline, a ';' or a\n"
            "closing brace. A line continuation does not end the window. Longer\n"
            "or heavily commented calls are only found by the syntax tree pass."
        ),
    ),
    ERROR_ACTION_RULE: RuleInfo(
        name=ERROR_ACTION_RULE,
        title="Error Action Preference Stop",
        description=(
            "Scripts must assign 'Stop' to $ErrorActionPreference at the top\n"
            "level so non-terminating errors halt execution. Quoted and bare\n"
            "values are accepted; any other value counts as missing."
        ),
        bad_example="$ErrorActionPreference = 'Continue'",
        good_example="$ErrorActionPreference = 'Stop'",
        limitations=(
            "The token fallback inspects at most 8 tokens after the variable\n"
            "and requires '=' as the next significant token."
        ),
    ),
}


def format_rule_detail(*, info: RuleInfo, enabled: bool) -> str:
    """Format a single rule's full documentation."""
    lines: list[str] = [
        f"{info.name}: {info.title}",
        f"Severity: warning | Enabled: {'Yes' if enabled else 'No'}",
        "",
        f"  {info.description}",
        "",
        f"  Bad:   {info.bad_example.splitlines()[0]}",
        f"  Good:  {info.good_example.splitlines()[0]}",
    ]

    if info.limitations:
        lines.extend(["", f"  Limits: {info.limitations.splitlines()[0]}"])
        for limit_line in info.limitations.splitlines()[1:]:
            lines.append(f"          {limit_line}")

    return "\n".join(lines)


def format_rule_table(*, catalog: dict[str, RuleInfo], enabled: dict[str, bool]) -> str:
    """Format all rules as a summary table."""
    lines: list[str] = [
        f"{'RULE':<24} {'ENABLED':<8} {'TITLE':<32}",
        "-" * 64,
    ]
    for name in sorted(catalog):
        info: RuleInfo = catalog[name]
        marker: str = "Yes" if enabled.get(name, False) else "No"
        lines.append(f"{name:<24} {marker:<8} {info.title:<32}")
    return "\n".join(lines)
