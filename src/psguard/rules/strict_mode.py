"""StrictModeVersionRule: require ``Set-StrictMode -Version 3`` at top level."""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

from psguard.constants import STRICT_MODE_COMMAND, STRICT_MODE_LOOKAHEAD, STRICT_MODE_RULE
from psguard.language import NodeKind, ScriptNode, Token, TokenKind, atoms, find_all, node_text
from psguard.rules.directive import DirectiveRule
from psguard.rules.scope import is_nested, top_level_token_indices

# A bare or dotted version whose major part is 3: 3, 3.0, 3.1.2.
VERSION_3_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?<![\w.])3(?:\.\d+)*(?![\w.])")

_WINDOW_END_KINDS: Final[frozenset[str]] = frozenset({TokenKind.NEWLINE, TokenKind.SEMICOLON})
_WINDOW_END_TEXT: Final[frozenset[str]] = frozenset({";", "}"})


class StrictModeVersionRule(DirectiveRule):
    """Detect scripts that never enable strict mode version 3."""

    rule_name = STRICT_MODE_RULE
    message = "Missing 'Set-StrictMode -Version 3.0' at the top level of the script."
    default_lookahead = STRICT_MODE_LOOKAHEAD

    def match_tree(self, root: ScriptNode) -> bool:
        return find_strict_mode_in_tree(root)

    def match_tokens(self, tokens: Sequence[Token]) -> bool:
        return find_strict_mode_in_tokens(tokens, lookahead=self.lookahead)


def find_strict_mode_in_tree(root: ScriptNode) -> bool:
    """Return True if a top-level ``Set-StrictMode`` call selects version 3."""
    for command in find_all(root, NodeKind.COMMAND):
        if not _is_strict_mode_call(command):
            continue
        if is_nested(command):
            continue
        if VERSION_3_PATTERN.search(command_arguments(command)):
            return True
    return False


def command_arguments(command: ScriptNode) -> str:
    """Join the argument atoms of ``command``, leaving out its name and comments."""
    return " ".join(
        node_text(atom)
        for atom in atoms(command)
        if atom.type not in (NodeKind.COMMAND_NAME, NodeKind.COMMENT)
    )


def find_strict_mode_in_tokens(
    tokens: Sequence[Token],
    *,
    lookahead: int = STRICT_MODE_LOOKAHEAD,
) -> bool:
    """Token-level variant of :func:`find_strict_mode_in_tree`.

    Looks at most ``lookahead`` tokens past the command name and stops early
    at the end of the statement. Comments and line continuations inside the
    window are skipped but still count against it.
    """
    target: str = STRICT_MODE_COMMAND.lower()
    for index in top_level_token_indices(tokens):
        if tokens[index].text.lower() != target:
            continue
        window: list[str] = []
        for token in tokens[index + 1:index + 1 + lookahead]:
            if token.kind in _WINDOW_END_KINDS or token.text in _WINDOW_END_TEXT:
                break
            if not token.is_trivia:
                window.append(token.text)
        if VERSION_3_PATTERN.search(" ".join(window)):
            return True
    return False


def _is_strict_mode_call(command: ScriptNode) -> bool:
    name: ScriptNode | None = command.child_by_field_name("command_name")
    return name is not None and node_text(name).lower() == STRICT_MODE_COMMAND.lower()
