"""Flat token stream built from the leaves of a PowerShell syntax tree.

Statement terminators and line continuations are hidden tokens in the
grammar and never show up as nodes. They are recovered from the source
bytes between two visible leaves.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

import tree_sitter

from psguard.language.extent import ScriptExtent, SourceText
from psguard.language.nodes import NodeKind, ScriptNode, node_text
from psguard.language.parser import parse_bytes


class TokenKind(StrEnum):
    """Kinds of tokens that have no node of their own."""

    NEWLINE = "newline"
    SEMICOLON = "semicolon"
    LINE_CONTINUATION = "line_continuation"


TRIVIA_KINDS: Final[frozenset[str]] = frozenset({
    NodeKind.COMMENT,
    TokenKind.NEWLINE,
    TokenKind.LINE_CONTINUATION,
})

# Nodes read as one token even when the grammar gives them children.
ATOMIC_KINDS: Final[frozenset[str]] = frozenset({
    NodeKind.COMMAND_NAME,
    NodeKind.COMMAND_PARAMETER,
    NodeKind.COMMAND_ARGUMENT_SEP,
    NodeKind.GENERIC_TOKEN,
    NodeKind.ASSIGNMENT_OPERATOR,
    NodeKind.VARIABLE,
    NodeKind.BRACED_VARIABLE,
    NodeKind.STRING_LITERAL,
    NodeKind.EXPANDABLE_STRING_LITERAL,
    NodeKind.EXPANDABLE_HERE_STRING_LITERAL,
    NodeKind.INTEGER_LITERAL,
    NodeKind.REAL_LITERAL,
    NodeKind.COMMENT,
})


@dataclass(frozen=True, slots=True)
class Token:
    """One token. ``kind`` is a node type or a :class:`TokenKind` value."""

    kind: str
    text: str
    extent: ScriptExtent

    @property
    def is_trivia(self) -> bool:
        return self.kind in TRIVIA_KINDS


def atoms(node: ScriptNode) -> Iterator[ScriptNode]:
    """Yield the leaves of ``node`` in document order, stopping at atomic kinds."""
    stack: list[ScriptNode] = [node]
    while stack:
        current: ScriptNode = stack.pop()
        if current.child_count == 0 or current.type in ATOMIC_KINDS:
            yield current
            continue
        stack.extend(reversed(current.children))


def tokenize(source: str, parser: tree_sitter.Parser | None = None) -> list[Token]:
    """Parse ``source`` afresh and flatten the tree into tokens.

    Blank leaves (argument separators, MISSING nodes) are dropped.
    """
    data: bytes = source.encode("utf-8")
    text: SourceText = SourceText(data)
    root: ScriptNode = parse_bytes(data, parser=parser).root_node

    tokens: list[Token] = []
    position: int = 0
    for leaf in atoms(root):
        tokens.extend(_separators(text, position, leaf.start_byte))
        position = leaf.end_byte
        leaf_text: str = node_text(leaf)
        if leaf_text.strip():
            tokens.append(Token(kind=leaf.type, text=leaf_text, extent=ScriptExtent.from_node(leaf)))
    tokens.extend(_separators(text, position, len(data)))
    return tokens


def _separators(text: SourceText, start: int, end: int) -> Iterator[Token]:
    gap: bytes = text.source[start:end]
    for index, byte in enumerate(gap):
        offset: int = start + index
        if byte == 0x3B:
            yield Token(kind=TokenKind.SEMICOLON, text=";", extent=text.extent(offset, offset + 1))
        elif byte == 0x0A:
            kind: TokenKind = TokenKind.NEWLINE
            if gap[:index].rstrip(b" \t\r").endswith(b"`"):
                kind = TokenKind.LINE_CONTINUATION
            yield Token(kind=kind, text="\n", extent=text.extent(offset, offset + 1))
