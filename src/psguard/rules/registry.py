"""Rule registry for psguard."""
from __future__ import annotations

from psguard.rules.base import Rule
from psguard.rules.error_action import ErrorActionStopRule
from psguard.rules.strict_mode import StrictModeVersionRule
from psguard.types import PsGuardConfig


def get_enabled_rules(*, config: PsGuardConfig) -> list[Rule]:
    """Return rule instances that are enabled in the given config."""
    all_rules: list[Rule] = _all_rules()
    return [rule for rule in all_rules if config.is_rule_enabled(rule.name)]


def _all_rules() -> list[Rule]:
    """Return all registered rule instances."""
    rules: list[Rule] = [
        StrictModeVersionRule(),
        ErrorActionStopRule(),
    ]
    return rules
