"""Single-file lint driver for psguard."""
from __future__ import annotations

import logging
from pathlib import Path

from psguard.constants import SYNTAX_ERROR_RULE, Severity
from psguard.diagnostics import Diagnostic
from psguard.parser import ParseResult, SyntaxErrorInfo, parse_file
from psguard.rules.base import Rule
from psguard.rules.registry import get_enabled_rules
from psguard.types import PsGuardConfig

logger = logging.getLogger(__name__)


def _syntax_error_to_diagnostic(*, parse_result: ParseResult) -> Diagnostic:
    err: SyntaxErrorInfo | None = parse_result.syntax_error
    if err is None:
        raise ValueError("parse_result must have a syntax_error")
    return Diagnostic(
        message=err.message,
        extent=err.extent,
        rule_name=SYNTAX_ERROR_RULE,
        severity=Severity.ERROR,
        file=parse_result.file,
    )


def lint_file(*, file: Path, config: PsGuardConfig) -> list[Diagnostic]:
    """Parse one script and run every enabled rule on it."""
    logger.debug("Checking %s", file)
    result: ParseResult = parse_file(file=file)
    if result.syntax_error is not None or result.tree is None:
        logger.info("Skipping rules for %s: syntax error", file)
        return [_syntax_error_to_diagnostic(parse_result=result)]

    diagnostics: list[Diagnostic] = []
    rules: list[Rule] = get_enabled_rules(config=config)
    for rule in rules:
        found: list[Diagnostic] = rule.check(
            node=result.tree,
            options=config.rules.options_for(rule.name),
            path=file,
        )
        logger.debug("%s: %s produced %d diagnostics", file, rule.name, len(found))
        diagnostics.extend(found)
    return diagnostics
