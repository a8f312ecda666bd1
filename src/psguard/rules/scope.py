"""Top-level scope classification for syntax nodes and tokens."""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Final

from psguard.language import NodeKind, ScriptNode, Token, ancestors

# Constructs that open a new scope: a directive inside one of these does not
# apply to the script as a whole. Statement blocks of if/try/loops do not.
NESTED_SCOPE_KINDS: Final[frozenset[str]] = frozenset({
    NodeKind.FUNCTION_STATEMENT,
    NodeKind.CLASS_STATEMENT,
    NodeKind.ENUM_STATEMENT,
    NodeKind.SCRIPT_BLOCK_EXPRESSION,
})

_OPEN_BRACES: Final[frozenset[str]] = frozenset({"{", "@{"})


def is_root(node: ScriptNode) -> bool:
    """A node without a parent is a whole-document root."""
    return node.parent is None


def is_nested(node: ScriptNode) -> bool:
    """Return True if any ancestor of ``node`` is a function, class or closure."""
    return any(parent.type in NESTED_SCOPE_KINDS for parent in ancestors(node))


def top_level_token_indices(tokens: Sequence[Token]) -> Iterator[int]:
    """Yield indices of non-trivia tokens outside any brace pair.

    Brace tokens themselves are never yielded.
    """
    depth: int = 0
    for index, token in enumerate(tokens):
        if token.text in _OPEN_BRACES:
            depth += 1
        elif token.text == "}":
            depth = max(0, depth - 1)
        elif depth == 0 and not token.is_trivia:
            yield index
