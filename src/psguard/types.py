"""Common types and dataclasses for psguard."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from psguard.constants import RULE_NAMES

RuleOptions = Mapping[str, Any]

_NO_OPTIONS: RuleOptions = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """Configuration for all rules.

    ``options`` holds the per-rule option bag from the config file. The
    bundled rules accept it and read nothing from it.
    """

    enabled: MappingProxyType[str, bool] = field(
        default_factory=lambda: MappingProxyType({name: True for name in RULE_NAMES})
    )
    options: MappingProxyType[str, RuleOptions] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def options_for(self, rule_name: str) -> RuleOptions:
        return self.options.get(rule_name, _NO_OPTIONS)


@dataclass(frozen=True, slots=True)
class PsGuardConfig:
    """Complete psguard configuration."""

    config_path: Path | None = None
    rules: RuleConfig = field(default_factory=RuleConfig)

    def is_rule_enabled(self, rule_name: str) -> bool:
        """Check if a rule is enabled. Unknown rules are disabled."""
        return self.rules.enabled.get(rule_name, False)


class ConfigError(Exception):
    """Error during configuration loading or validation."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path: Path | None = path
        super().__init__(message)
