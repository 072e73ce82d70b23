"""A parsed source file plus the location helpers errors need."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar

import tree_sitter

from intl_extract.errors import ExtractionError
from intl_extract.schema.models import Position

E = TypeVar("E", bound=ExtractionError)

FRAME_CONTEXT_LINES = 2


@dataclass
class SourceFile:
    """A parsed file: raw bytes, tree-sitter tree and its path relative to the working directory."""

    filename: str
    rel_path: str
    source: bytes
    tree: tree_sitter.Tree
    language: str
    _lines: list[bytes] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._lines = self.source.split(b"\n")

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    def _point(self, point: tuple[int, int]) -> Position:
        row, byte_col = point[0], point[1]
        line = self._lines[row] if row < len(self._lines) else b""
        column = len(line[:byte_col].decode("utf-8", errors="replace"))
        return Position(line=row + 1, column=column)

    def span(self, node: tree_sitter.Node) -> tuple[Position, Position]:
        """Start and end positions of a node (1-based lines, character columns)."""
        return self._point(node.start_point), self._point(node.end_point)

    def code_frame(self, node: tree_sitter.Node) -> str:
        """Render the lines around a node with a caret under its start."""
        start, _ = self.span(node)
        first = max(1, start.line - FRAME_CONTEXT_LINES)
        last = min(len(self._lines), start.line + FRAME_CONTEXT_LINES)
        width = len(str(last))

        out: list[str] = []
        for number in range(first, last + 1):
            text = self._lines[number - 1].decode("utf-8", errors="replace").rstrip("\r")
            marker = ">" if number == start.line else " "
            out.append(f"{marker} {number:>{width}} | {text}".rstrip())
            if number == start.line:
                out.append(f"  {' ' * width} | {' ' * start.column}^")
        return "\n".join(out)

    def error(self, cls: type[E], node: tree_sitter.Node, message: str) -> E:
        """Build an extraction error located at ``node``."""
        start, _ = self.span(node)
        return cls(
            message,
            file=self.rel_path,
            line=start.line,
            column=start.column,
            frame=self.code_frame(node),
        )
