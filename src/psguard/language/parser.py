"""Tree-sitter setup for PowerShell: build parsers and parse script text."""
from __future__ import annotations

import logging

import tree_sitter
import tree_sitter_powershell
from tree_sitter import Language

logger = logging.getLogger(__name__)

_POWERSHELL_LANGUAGE: Language = Language(tree_sitter_powershell.language())


def get_language() -> Language:
    """Return the tree-sitter Language object for PowerShell."""
    return _POWERSHELL_LANGUAGE


def create_parser() -> tree_sitter.Parser:
    """Create a tree-sitter parser configured for PowerShell."""
    return tree_sitter.Parser(_POWERSHELL_LANGUAGE)


def parse_bytes(
    source: bytes,
    parser: tree_sitter.Parser | None = None,
) -> tree_sitter.Tree:
    """
    Parse UTF-8 encoded script source into a syntax tree.

    The parser never raises on bad input. Check ``tree.root_node.has_error``
    for ERROR and MISSING nodes.
    """
    if parser is None:
        parser = create_parser()
    tree: tree_sitter.Tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.debug("Parse completed with errors: root=%s", tree.root_node.type)
    else:
        logger.debug("Parse succeeded: root=%s", tree.root_node.type)
    return tree


def parse_script(source: str, parser: tree_sitter.Parser | None = None) -> tree_sitter.Node:
    """Parse script text and return the root (``program``) node.

    Nodes hold a reference to their tree, so parent links stay valid for as
    long as any node of the tree is alive.
    """
    return parse_bytes(source.encode("utf-8"), parser=parser).root_node
