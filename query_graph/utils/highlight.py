"""
Highlighting helpers for located nodes.

This module turns node locations into the data an editor overlay needs
(ordered plain / highlighted segments) and renders caret-marked excerpts for
terminal output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from query_graph.models.node import GraphNode, NodeKind

CATEGORY_TABLE = "table"
CATEGORY_CTE = "cte"
CATEGORY_SUBQUERY = "subquery"


def node_category(kind: NodeKind) -> str:
    """Map a node kind to its visual category.

    MAIN and JOIN share the table category.

    Example:
        >>> node_category(NodeKind.MAIN)
        'table'
    """
    if kind is NodeKind.CTE:
        return CATEGORY_CTE
    if kind is NodeKind.SUBQUERY:
        return CATEGORY_SUBQUERY
    return CATEGORY_TABLE


@dataclass(frozen=True)
class HighlightSegment:
    """A run of text that is either plain or belongs to a node.

    Attributes:
        text: Segment text.
        start: Offset of the segment in the source text.
        end: Offset one past the segment.
        node_id: Id of the node this segment names, or None for plain text.
        kind: NodeKind of that node, or None for plain text.
    """

    text: str
    start: int
    end: int
    node_id: Optional[str] = None
    kind: Optional[NodeKind] = None

    @property
    def is_highlighted(self) -> bool:
        return self.node_id is not None


def highlight_segments(
    text: str, nodes: Iterable[GraphNode]
) -> List[HighlightSegment]:
    """Cut ``text`` into plain and node segments.

    Located nodes are visited by start offset; a node whose span starts
    before the end of the previous highlighted span is skipped. The returned
    segments cover ``text`` exactly, in order.

    Args:
        text: Original SQL text the node locations refer to.
        nodes: Nodes to highlight. Nodes without a location are ignored.

    Returns:
        List of HighlightSegment objects.

    Example:
        >>> graph = extract_graph("SELECT * FROM t")
        >>> [s.text for s in highlight_segments("SELECT * FROM t", graph.nodes)]
        ['SELECT * FROM ', 't']
    """
    located = sorted(
        (node for node in nodes if node.location is not None),
        key=lambda node: node.location.start,
    )

    segments: List[HighlightSegment] = []
    cursor = 0
    for node in located:
        start, end = node.location.start, node.location.end
        if start < cursor or end > len(text):
            continue
        if start > cursor:
            segments.append(HighlightSegment(text[cursor:start], cursor, start))
        segments.append(
            HighlightSegment(text[start:end], start, end, node.id, node.kind)
        )
        cursor = end

    if cursor < len(text):
        segments.append(HighlightSegment(text[cursor:], cursor, len(text)))
    return segments


def highlight_position(
    sql: str,
    position: int,
    length: int = 1,
    context_lines: int = 2,
) -> str:
    """Show the lines around ``position`` with carets under the target.

    Args:
        sql: SQL text.
        position: Character position (0-based).
        length: Number of carets.
        context_lines: Number of lines shown before and after.

    Returns:
        Numbered excerpt with a caret line under the target line.

    Example:
        Input: "SELECT id FROM users", position=15, length=5
        Output:
          1 | SELECT id FROM users
                             ^^^^^
    """
    lines = sql.split("\n")

    current_pos = 0
    target_line = len(lines) - 1
    col_in_line = 0
    for i, line in enumerate(lines):
        line_len = len(line) + 1  # +1 for newline
        if current_pos + line_len > position:
            target_line = i
            col_in_line = position - current_pos
            break
        current_pos += line_len

    result = []
    start_line = max(0, target_line - context_lines)
    end_line = min(len(lines), target_line + context_lines + 1)

    for i in range(start_line, end_line):
        result.append(f"{i+1:3d} | {lines[i]}")
        if i == target_line:
            pointer = " " * (col_in_line + 6)  # 6 = "xxx | " length
            pointer += "^" * max(length, 1)
            result.append(pointer)

    return "\n".join(result)
