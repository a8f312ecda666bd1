"""Pytest fixtures for psguard tests."""
from __future__ import annotations

from pathlib import Path

import pytest


COMPLIANT_SCRIPT: str = """\
Set-StrictMode -Version 3.0
$ErrorActionPreference = 'Stop'

Write-Host 'hello'
"""


@pytest.fixture
def compliant_script(tmp_path: Path) -> Path:
    """Create a script that satisfies every bundled rule."""
    script: Path = tmp_path / "good.ps1"
    script.write_text(COMPLIANT_SCRIPT)
    return script


@pytest.fixture
def bare_script(tmp_path: Path) -> Path:
    """Create a script with neither directive."""
    script: Path = tmp_path / "bare.ps1"
    script.write_text("Write-Host 'hi'\n")
    return script


@pytest.fixture
def temp_pyproject(tmp_path: Path) -> Path:
    """Create a temporary pyproject.toml file."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[tool.psguard.rules]
ErrorActionStopRule = false

[tool.psguard.rules.StrictModeVersionRule]
enabled = true
severity_hint = "strict"
"""
    )
    return config_path


@pytest.fixture
def empty_pyproject(tmp_path: Path) -> Path:
    """Create a pyproject.toml without [tool.psguard] section."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[project]
name = "test-project"
version = "0.1.0"
"""
    )
    return config_path


@pytest.fixture
def invalid_toml(tmp_path: Path) -> Path:
    """Create an invalid TOML file."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text("invalid [ toml content")
    return config_path


@pytest.fixture
def invalid_config(tmp_path: Path) -> Path:
    """Create a pyproject.toml with invalid psguard config."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[tool.psguard]
output_format = "text"

[tool.psguard.rules]
FakeRule = true
ErrorActionStopRule = "sometimes"

[tool.psguard.rules.StrictModeVersionRule]
enabled = "yes"
"""
    )
    return config_path
