"""Tests for StrictModeVersionRule: require Set-StrictMode -Version 3 at top level."""
from __future__ import annotations

from pathlib import Path

import pytest

from psguard.constants import STRICT_MODE_RULE, Severity
from psguard.diagnostics import Diagnostic
from psguard.language import ScriptExtent, ScriptNode, Token, parse_script, tokenize
from psguard.rules.strict_mode import (
    VERSION_3_PATTERN,
    StrictModeVersionRule,
    find_strict_mode_in_tokens,
    find_strict_mode_in_tree,
)


def _check(code: str, *, path: Path | None = None) -> list[Diagnostic]:
    rule: StrictModeVersionRule = StrictModeVersionRule()
    return rule.check(node=parse_script(code), path=path)


def _tokens_match(code: str, *, lookahead: int = 6) -> bool:
    tokens: list[Token] = tokenize(code)
    return find_strict_mode_in_tokens(tokens, lookahead=lookahead)


class TestStrictModeScenarios:
    def test_no_directive(self) -> None:
        diags: list[Diagnostic] = _check("Write-Host 'hi'")
        assert len(diags) == 1
        assert diags[0].message.startswith("Missing")

    def test_version_3_then_other_statements(self) -> None:
        code: str = "Set-StrictMode -Version 3.0\n$x = 1\nWrite-Host $x\n"
        assert _check(code) == []

    def test_version_2_is_missing(self) -> None:
        diags: list[Diagnostic] = _check("Set-StrictMode -Version 2.0")
        assert len(diags) == 1
        assert diags[0].message.startswith("Missing")

    def test_positional_version(self) -> None:
        assert _check("Set-StrictMode 3.0") == []


class TestStrictModeAcceptedForms:
    @pytest.mark.parametrize(
        "code",
        [
            pytest.param("Set-StrictMode -Version 3", id="bare_major"),
            pytest.param("Set-StrictMode -Version 3.0", id="major_minor"),
            pytest.param("Set-StrictMode -Version 3.1.2", id="three_part"),
            pytest.param("Set-StrictMode -Version:3.0", id="colon_bound"),
            pytest.param("Set-StrictMode -Version '3.0'", id="quoted"),
            pytest.param("set-strictmode -version 3", id="lowercase"),
            pytest.param("Set-StrictMode    -Version     3.0", id="spacing"),
            pytest.param("Set-StrictMode `\n    -Version 3.0", id="continuation"),
            pytest.param("# header\nSet-StrictMode -Version 3.0 # trailing", id="comments"),
            pytest.param("if ($true) { Set-StrictMode -Version 3 }", id="statement_block"),
        ],
    )
    def test_accepted(self, code: str) -> None:
        assert _check(code) == []

    @pytest.mark.parametrize(
        "code",
        [
            pytest.param("Set-StrictMode -Version Latest", id="latest"),
            pytest.param("Set-StrictMode -Version 1.0", id="version_1"),
            pytest.param("Set-StrictMode -Version 13", id="thirteen"),
            pytest.param("Set-StrictMode -Version 2.3", id="minor_three"),
            pytest.param("Set-StrictMode -Off", id="off"),
            pytest.param("Write-Host 'Set-StrictMode -Version 3'", id="in_string"),
            pytest.param("# Set-StrictMode -Version 3", id="in_comment"),
            pytest.param("Set-StrictMode -Off # was 3", id="trailing_comment"),
        ],
    )
    def test_rejected(self, code: str) -> None:
        assert len(_check(code)) == 1


class TestStrictModeNesting:
    def test_only_in_function(self) -> None:
        code: str = "function Init {\n    Set-StrictMode -Version 3.0\n}\nInit\n"
        assert len(_check(code)) == 1

    def test_only_in_class(self) -> None:
        code: str = "class C {\n    [void] Init() { Set-StrictMode -Version 3 }\n}\n"
        assert len(_check(code)) == 1

    def test_only_in_script_block(self) -> None:
        assert len(_check("$init = { Set-StrictMode -Version 3 }")) == 1

    def test_nested_and_top_level(self) -> None:
        code: str = "function f { Set-StrictMode -Version 2 }\nSet-StrictMode -Version 3\n"
        assert _check(code) == []


class TestStrictModeDiagnostic:
    def test_diagnostic_fields(self, tmp_path: Path) -> None:
        script: Path = tmp_path / "bare.ps1"
        code: str = "Write-Host 'a'\nWrite-Host 'b'\n"
        script.write_text(code)

        diags: list[Diagnostic] = _check(code, path=script)

        assert len(diags) == 1
        diag: Diagnostic = diags[0]
        assert diag.rule_name == STRICT_MODE_RULE
        assert diag.severity == Severity.WARNING
        assert diag.file == script
        assert diag.message == (
            "Missing 'Set-StrictMode -Version 3.0' at the top level of the script."
        )
        assert diag.extent == ScriptExtent.from_node(parse_script(code))
        assert diag.extent.start_line == 1

    def test_non_root_node_is_ignored(self) -> None:
        root: ScriptNode = parse_script("Write-Host 'hi'")
        rule: StrictModeVersionRule = StrictModeVersionRule()
        assert rule.check(node=root.children[0]) == []

    def test_idempotent(self) -> None:
        root: ScriptNode = parse_script("Write-Host 'hi'")
        rule: StrictModeVersionRule = StrictModeVersionRule()
        first: list[Diagnostic] = rule.check(node=root)
        second: list[Diagnostic] = rule.check(node=root)
        assert first == second
        assert len(first) == 1

    def test_options_are_ignored(self) -> None:
        rule: StrictModeVersionRule = StrictModeVersionRule()
        root: ScriptNode = parse_script("Set-StrictMode -Version 3")
        assert rule.check(node=root, options={"anything": 1}) == []


class TestStrictModeTokenFallback:
    def test_fallback_finds_directive_tree_missed(self, tmp_path: Path) -> None:
        script: Path = tmp_path / "script.ps1"
        script.write_text("Set-StrictMode -Version 3.0\n")

        # The tree handed in does not contain the call; the file on disk does.
        diags: list[Diagnostic] = _check("", path=script)

        assert diags == []

    def test_fallback_accepts_string_path(self, tmp_path: Path) -> None:
        script: Path = tmp_path / "script.ps1"
        script.write_text("Set-StrictMode 3\n")
        rule: StrictModeVersionRule = StrictModeVersionRule()
        assert rule.check(node=parse_script(""), path=str(script)) == []

    def test_fallback_ignores_nested_directive(self, tmp_path: Path) -> None:
        script: Path = tmp_path / "script.ps1"
        script.write_text("function f {\n  Set-StrictMode -Version 3.0\n}\n")
        assert len(_check("", path=script)) == 1

    def test_missing_file_degrades_to_tree_verdict(self, tmp_path: Path) -> None:
        diags: list[Diagnostic] = _check("", path=tmp_path / "gone.ps1")
        assert len(diags) == 1

    def test_fallback_reads_files_with_syntax_errors(self, tmp_path: Path) -> None:
        script: Path = tmp_path / "broken.ps1"
        script.write_text("Set-StrictMode -Version 3.0\nfunction f {\n")
        assert _check("", path=script) == []

    def test_undecodable_file_degrades_to_tree_verdict(self, tmp_path: Path) -> None:
        script: Path = tmp_path / "binary.ps1"
        script.write_bytes(b"\xff\xfe\x80")
        assert len(_check("", path=script)) == 1

    def test_directory_path_degrades_to_tree_verdict(self, tmp_path: Path) -> None:
        assert len(_check("", path=tmp_path)) == 1


class TestStrictModeTokenMatcher:
    def test_match(self) -> None:
        assert _tokens_match("Set-StrictMode -Version 3.0")

    def test_version_on_next_statement_does_not_count(self) -> None:
        assert not _tokens_match("Set-StrictMode -Off\n$x = 3")

    def test_semicolon_ends_window(self) -> None:
        assert not _tokens_match("Set-StrictMode -Off; $v = 3")

    def test_continuation_keeps_window_open(self) -> None:
        assert _tokens_match("Set-StrictMode `\n -Version 3")

    def test_window_is_bounded(self) -> None:
        code: str = "Set-StrictMode <#a#> <#b#> <#c#> <#d#> <#e#> -Version 3"
        assert not _tokens_match(code)
        assert _tokens_match(code, lookahead=7)

    def test_custom_rule_lookahead(self, tmp_path: Path) -> None:
        script: Path = tmp_path / "script.ps1"
        script.write_text("Set-StrictMode <#a#> <#b#> <#c#> <#d#> <#e#> -Version 3\n")
        narrow: StrictModeVersionRule = StrictModeVersionRule()
        wide: StrictModeVersionRule = StrictModeVersionRule(lookahead=10)

        assert len(narrow.check(node=parse_script(""), path=script)) == 1
        assert wide.check(node=parse_script(""), path=script) == []

    def test_invalid_lookahead(self) -> None:
        with pytest.raises(ValueError):
            StrictModeVersionRule(lookahead=0)


class TestVersionPattern:
    @pytest.mark.parametrize("text", ["3", "3.0", "3.1.2", "-Version 3", "'3.0'"])
    def test_matches(self, text: str) -> None:
        assert VERSION_3_PATTERN.search(text)

    @pytest.mark.parametrize("text", ["2.0", "13", "2.3", "30", "Latest", "v3"])
    def test_does_not_match(self, text: str) -> None:
        assert not VERSION_3_PATTERN.search(text)


def test_tree_matcher_is_independent() -> None:
    assert find_strict_mode_in_tree(parse_script("Set-StrictMode -Version 3"))
    assert not find_strict_mode_in_tree(parse_script("Set-StrictMode -Version 2"))
