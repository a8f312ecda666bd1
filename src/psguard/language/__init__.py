"""PowerShell front end: tree-sitter parser, node helpers and token stream."""
from __future__ import annotations

from psguard.language.extent import ScriptExtent, SourceText
from psguard.language.nodes import (
    NodeKind,
    ScriptNode,
    ancestors,
    find_all,
    first_error,
    node_text,
    walk,
)
from psguard.language.parser import create_parser, get_language, parse_bytes, parse_script
from psguard.language.tokens import TRIVIA_KINDS, Token, TokenKind, atoms, tokenize

__all__ = [
    "NodeKind",
    "ScriptExtent",
    "ScriptNode",
    "SourceText",
    "TRIVIA_KINDS",
    "Token",
    "TokenKind",
    "ancestors",
    "atoms",
    "create_parser",
    "find_all",
    "first_error",
    "get_language",
    "node_text",
    "parse_bytes",
    "parse_script",
    "tokenize",
    "walk",
]
