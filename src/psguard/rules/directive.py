"""Shared evaluator for rules that require a top-level script directive."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar

from psguard.constants import Severity
from psguard.diagnostics import Diagnostic
from psguard.language import ScriptExtent, ScriptNode, Token, tokenize
from psguard.rules.scope import is_root
from psguard.types import RuleOptions

logger = logging.getLogger(__name__)


class DirectiveRule:
    """
    Base class for single-verdict directive rules.

    Evaluation runs in three steps:

    1. Structural match over the syntax tree (``match_tree``).
    2. If that fails and the script's path points at an existing file, an
       independent match over tokens from a fresh parse of the file
       (``match_tokens``). Read or decode failures count as "not found".
    3. If neither matched, one WARNING diagnostic spanning the document.

    Subclasses set ``rule_name``, ``message`` and ``default_lookahead`` and
    implement the two matchers.
    """

    rule_name: ClassVar[str]
    message: ClassVar[str]
    default_lookahead: ClassVar[int]

    def __init__(self, *, lookahead: int | None = None) -> None:
        if lookahead is not None and lookahead < 1:
            raise ValueError(f"lookahead must be positive, got {lookahead}")
        self._lookahead: int = lookahead if lookahead is not None else self.default_lookahead

    @property
    def name(self) -> str:
        return self.rule_name

    @property
    def lookahead(self) -> int:
        """Maximum number of tokens the fallback inspects after a candidate."""
        return self._lookahead

    def check(
        self,
        *,
        node: ScriptNode,
        options: RuleOptions | None = None,
        path: Path | str | None = None,
    ) -> list[Diagnostic]:
        if not is_root(node):
            return []

        file: Path | None = Path(path) if path is not None else None

        if self.match_tree(node):
            return []
        if file is not None and self._fallback_matches(file):
            logger.debug("%s: satisfied by token fallback in %s", self.rule_name, file)
            return []

        return [
            Diagnostic(
                message=self.message,
                extent=ScriptExtent.from_node(node),
                rule_name=self.rule_name,
                severity=Severity.WARNING,
                file=file,
            ),
        ]

    def match_tree(self, root: ScriptNode) -> bool:
        raise NotImplementedError

    def match_tokens(self, tokens: Sequence[Token]) -> bool:
        raise NotImplementedError

    def _fallback_matches(self, file: Path) -> bool:
        try:
            if not file.is_file():
                logger.debug("%s: no token fallback, %s is not a file", self.rule_name, file)
                return False
            tokens: list[Token] = tokenize(file.read_text(encoding="utf-8-sig"))
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("%s: token fallback failed for %s: %s", self.rule_name, file, e)
            return False
        return self.match_tokens(tokens)
