"""ErrorActionStopRule: require ``$ErrorActionPreference = 'Stop'`` at top level."""
from __future__ import annotations

from collections.abc import Sequence

from psguard.constants import (
    ERROR_ACTION_LOOKAHEAD,
    ERROR_ACTION_RULE,
    ERROR_ACTION_VALUE,
    ERROR_ACTION_VARIABLE,
)
from psguard.language import NodeKind, ScriptNode, Token, find_all, node_text
from psguard.rules.directive import DirectiveRule
from psguard.rules.scope import is_nested, top_level_token_indices


class ErrorActionStopRule(DirectiveRule):
    """Detect scripts that never set the error action preference to Stop."""

    rule_name = ERROR_ACTION_RULE
    message = (
        f"Missing '${ERROR_ACTION_VARIABLE} = '{ERROR_ACTION_VALUE}'' "
        "at the top level of the script."
    )
    default_lookahead = ERROR_ACTION_LOOKAHEAD

    def match_tree(self, root: ScriptNode) -> bool:
        return find_error_action_in_tree(root)

    def match_tokens(self, tokens: Sequence[Token]) -> bool:
        return find_error_action_in_tokens(tokens, lookahead=self.lookahead)


def strip_quotes(text: str) -> str:
    """Trim ``text`` and remove one matching pair of surrounding quotes."""
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


def is_stop_value(text: str) -> bool:
    return strip_quotes(text).lower() == ERROR_ACTION_VALUE.lower()


def find_error_action_in_tree(root: ScriptNode) -> bool:
    """Return True if a top-level assignment sets the preference to Stop."""
    variable: str = f"${ERROR_ACTION_VARIABLE}".lower()
    for assignment in find_all(root, NodeKind.ASSIGNMENT_EXPRESSION):
        if is_nested(assignment):
            continue
        target: ScriptNode | None = _first_child(assignment, NodeKind.LEFT_ASSIGNMENT_EXPRESSION)
        operator: ScriptNode | None = _first_child(assignment, NodeKind.ASSIGNMENT_OPERATOR)
        value: ScriptNode | None = assignment.child_by_field_name("value")
        if target is None or operator is None or value is None:
            continue
        if node_text(operator) != "=":
            continue
        if node_text(target).strip().lower() != variable:
            continue
        if is_stop_value(node_text(value)):
            return True
    return False


def find_error_action_in_tokens(
    tokens: Sequence[Token],
    *,
    lookahead: int = ERROR_ACTION_LOOKAHEAD,
) -> bool:
    """Token-level variant of :func:`find_error_action_in_tree`.

    An occurrence of the variable only counts when the next significant
    token is ``=``; otherwise scanning moves on to the next occurrence.
    """
    reference: str = f"${ERROR_ACTION_VARIABLE}"
    for index in top_level_token_indices(tokens):
        token: Token = tokens[index]
        if token.kind != NodeKind.VARIABLE or token.text != reference:
            continue
        if _assigns_stop(tokens[index + 1:index + 1 + lookahead]):
            return True
    return False


def _first_child(node: ScriptNode, kind: str) -> ScriptNode | None:
    for child in node.children:
        if child.type == kind:
            return child
    return None


def _assigns_stop(window: Sequence[Token]) -> bool:
    significant: list[Token] = [t for t in window if not t.is_trivia]
    if len(significant) < 2:
        return False
    operator, value = significant[0], significant[1]
    if operator.text != "=":
        return False
    return is_stop_value(value.text)
