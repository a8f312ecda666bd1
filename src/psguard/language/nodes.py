"""Node kinds and traversal helpers for the PowerShell syntax tree."""
from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import TypeAlias

import tree_sitter

ScriptNode: TypeAlias = tree_sitter.Node


class NodeKind(StrEnum):
    """tree-sitter-powershell node types the rules look at."""

    PROGRAM = "program"
    FUNCTION_STATEMENT = "function_statement"
    CLASS_STATEMENT = "class_statement"
    ENUM_STATEMENT = "enum_statement"
    SCRIPT_BLOCK_EXPRESSION = "script_block_expression"
    STATEMENT_BLOCK = "statement_block"
    COMMAND = "command"
    COMMAND_NAME = "command_name"
    COMMAND_PARAMETER = "command_parameter"
    COMMAND_ARGUMENT_SEP = "command_argument_sep"
    GENERIC_TOKEN = "generic_token"
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    LEFT_ASSIGNMENT_EXPRESSION = "left_assignment_expression"
    # Spelled as in the grammar.
    ASSIGNMENT_OPERATOR = "assignement_operator"
    VARIABLE = "variable"
    BRACED_VARIABLE = "braced_variable"
    STRING_LITERAL = "string_literal"
    EXPANDABLE_STRING_LITERAL = "expandable_string_literal"
    EXPANDABLE_HERE_STRING_LITERAL = "expandable_here_string_literal"
    INTEGER_LITERAL = "integer_literal"
    REAL_LITERAL = "real_literal"
    COMMENT = "comment"


def node_text(node: ScriptNode) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def walk(node: ScriptNode) -> Iterator[ScriptNode]:
    """Yield ``node`` and all of its descendants in document order."""
    stack: list[ScriptNode] = [node]
    while stack:
        current: ScriptNode = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def find_all(node: ScriptNode, kind: str) -> Iterator[ScriptNode]:
    for candidate in walk(node):
        if candidate.type == kind:
            yield candidate


def ancestors(node: ScriptNode) -> Iterator[ScriptNode]:
    """Yield the parent of ``node``, then its parent, up to the root."""
    current: ScriptNode | None = node.parent
    while current is not None:
        yield current
        current = current.parent


def first_error(node: ScriptNode) -> ScriptNode | None:
    """Return the first ERROR or MISSING node under ``node``, if any."""
    if not node.has_error:
        return None
    for candidate in walk(node):
        if candidate.is_error or candidate.is_missing:
            return candidate
    return None
