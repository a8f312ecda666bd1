"""Configuration loading and validation for psguard."""
from __future__ import annotations

import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Any

from psguard.constants import RULE_NAMES
from psguard.types import ConfigError, PsGuardConfig, RuleConfig, RuleOptions


class ConfigLoader:
    """Loads and validates psguard configuration."""

    @staticmethod
    def find_config_file(start_path: Path | None = None) -> Path | None:
        """
        Find pyproject.toml by walking up from start_path.

        Args:
            start_path: Directory to start searching from. Defaults to cwd.

        Returns:
            Path to pyproject.toml if found, None otherwise.
        """
        if start_path is None:
            start_path = Path.cwd()

        start_path = start_path.resolve()

        for directory in [start_path, *start_path.parents]:
            config_path: Path = directory / "pyproject.toml"
            if config_path.is_file():
                return config_path

        return None

    @staticmethod
    def load(path: Path | None = None) -> PsGuardConfig:
        """
        Load configuration from pyproject.toml.

        Args:
            path: Explicit path to pyproject.toml. If None, searches upward.

        Returns:
            Validated PsGuardConfig instance.

        Raises:
            ConfigError: If configuration is invalid.
        """
        if path is None:
            path = ConfigLoader.find_config_file()

        if path is None:
            return PsGuardConfig()

        try:
            with open(path, "rb") as f:
                data: dict[str, Any] = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML: {e}", path=path) from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}", path=path) from e

        tool_config: Any = data.get("tool", {}).get("psguard", {})
        if not isinstance(tool_config, dict):
            raise ConfigError("[tool.psguard] must be a table", path=path)

        return ConfigLoader._parse_config(tool_config, config_path=path)

    @staticmethod
    def _parse_config(
        data: dict[str, Any],
        *,
        config_path: Path | None = None,
    ) -> PsGuardConfig:
        """Parse and validate configuration dictionary."""
        errors: list[str] = []

        unknown_keys: list[str] = sorted(set(data) - {"rules"})
        if unknown_keys:
            errors.append(f"unknown configuration keys: {unknown_keys}")

        raw_rules: Any = data.get("rules", {})
        rules: RuleConfig
        if isinstance(raw_rules, dict):
            rules = ConfigLoader._parse_rules(raw_rules, errors)
        else:
            errors.append(f"rules must be a table, got {type(raw_rules).__name__}")
            rules = RuleConfig()

        if errors:
            error_msg: str = "Configuration errors:\n" + "\n".join(
                f"  - {e}" for e in errors
            )
            raise ConfigError(error_msg, path=config_path)

        return PsGuardConfig(config_path=config_path, rules=rules)

    @staticmethod
    def _parse_rules(data: dict[str, Any], errors: list[str]) -> RuleConfig:
        """Parse the rules table.

        Each entry is either a boolean or a table with an optional ``enabled``
        flag; every other key of the table is kept as the rule's option bag.
        """
        canonical: dict[str, str] = {name.lower(): name for name in RULE_NAMES}
        enabled: dict[str, bool] = {name: True for name in RULE_NAMES}
        options: dict[str, RuleOptions] = {}

        for key, value in data.items():
            rule_name: str | None = canonical.get(key.lower())
            if rule_name is None:
                errors.append(f"rules.{key} is not a known rule")
                continue

            if isinstance(value, bool):
                enabled[rule_name] = value
            elif isinstance(value, dict):
                flag: Any = value.get("enabled", True)
                if isinstance(flag, bool):
                    enabled[rule_name] = flag
                else:
                    errors.append(f"rules.{key}.enabled must be a boolean")
                options[rule_name] = MappingProxyType(
                    {k: v for k, v in value.items() if k != "enabled"}
                )
            else:
                errors.append(f"rules.{key} must be a boolean or a table")

        return RuleConfig(
            enabled=MappingProxyType(enabled),
            options=MappingProxyType(options),
        )


def load_config(path: Path | None = None) -> PsGuardConfig:
    """
    Convenience function to load configuration.

    Args:
        path: Optional explicit path to pyproject.toml.

    Returns:
        Validated configuration.
    """
    return ConfigLoader.load(path)
