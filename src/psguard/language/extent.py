"""Source spans for PowerShell tokens and syntax nodes."""
from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

import tree_sitter


@dataclass(frozen=True, slots=True)
class ScriptExtent:
    """A span of script source.

    Offsets are 0-based UTF-8 byte offsets, as tree-sitter reports them.
    Lines and columns are 1-based; columns count bytes.
    """

    start_offset: int
    end_offset: int
    start_line: int
    start_column: int
    end_line: int
    end_column: int
    text: str

    @classmethod
    def from_node(cls, node: tree_sitter.Node) -> ScriptExtent:
        return cls(
            start_offset=node.start_byte,
            end_offset=node.end_byte,
            start_line=node.start_point.row + 1,
            start_column=node.start_point.column + 1,
            end_line=node.end_point.row + 1,
            end_column=node.end_point.column + 1,
            text=(node.text or b"").decode("utf-8", errors="replace"),
        )


class SourceText:
    """Encoded script source with a line index for offset -> line/column lookups."""

    def __init__(self, source: bytes) -> None:
        self.source: bytes = source
        self._line_starts: list[int] = [0]
        for idx, byte in enumerate(source):
            if byte == 0x0A:
                self._line_starts.append(idx + 1)

    def position(self, offset: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of a byte offset."""
        line_idx: int = bisect_right(self._line_starts, offset) - 1
        return line_idx + 1, offset - self._line_starts[line_idx] + 1

    def extent(self, start: int, end: int) -> ScriptExtent:
        start_line, start_column = self.position(start)
        end_line, end_column = self.position(end)
        return ScriptExtent(
            start_offset=start,
            end_offset=end,
            start_line=start_line,
            start_column=start_column,
            end_line=end_line,
            end_column=end_column,
            text=self.source[start:end].decode("utf-8", errors="replace"),
        )
