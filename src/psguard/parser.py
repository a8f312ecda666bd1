"""Script parsing with syntax error detection for psguard."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from psguard.language import ScriptExtent, ScriptNode, first_error, node_text, parse_script

logger = logging.getLogger(__name__)

_START_OF_FILE: ScriptExtent = ScriptExtent(
    start_offset=0,
    end_offset=0,
    start_line=1,
    start_column=1,
    end_line=1,
    end_column=1,
    text="",
)


@dataclass(frozen=True, slots=True)
class SyntaxErrorInfo:
    """Syntax error details and the span they point at."""

    message: str
    extent: ScriptExtent

    @property
    def line(self) -> int:
        return self.extent.start_line

    @property
    def column(self) -> int:
        return self.extent.start_column


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Result of parsing a PowerShell script."""

    file: Path
    tree: ScriptNode | None
    syntax_error: SyntaxErrorInfo | None


def parse_file(*, file: Path) -> ParseResult:
    """Parse a PowerShell file, returning the tree or a syntax error."""
    try:
        source: str = file.read_text(encoding="utf-8-sig")
    except OSError as e:
        return ParseResult(
            file=file,
            tree=None,
            syntax_error=SyntaxErrorInfo(message=f"Cannot read file: {e}", extent=_START_OF_FILE),
        )
    except UnicodeDecodeError as e:
        return ParseResult(
            file=file,
            tree=None,
            syntax_error=SyntaxErrorInfo(message=f"Encoding error: {e}", extent=_START_OF_FILE),
        )

    return parse_source(source=source, file=file)


def parse_source(*, source: str, file: Path) -> ParseResult:
    """Parse in-memory script text attributed to ``file``."""
    tree: ScriptNode = parse_script(source)
    error: ScriptNode | None = first_error(tree)
    if error is None:
        return ParseResult(file=file, tree=tree, syntax_error=None)

    info: SyntaxErrorInfo = SyntaxErrorInfo(
        message=_describe(error),
        extent=ScriptExtent.from_node(error),
    )
    logger.debug("Syntax error in %s:%d:%d: %s", file, info.line, info.column, info.message)
    return ParseResult(file=file, tree=None, syntax_error=info)


def _describe(error: ScriptNode) -> str:
    if error.is_missing:
        return f"Missing '{error.type}'"
    text: str = node_text(error).strip()
    first_line: str = text.splitlines()[0] if text else ""
    return f"Unexpected '{first_line}'"
