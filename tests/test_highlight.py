"""
Tests for highlight segments and caret excerpts.
"""

from query_graph import (
    GraphNode,
    NodeKind,
    SourceSpan,
    extract_graph,
    highlight_segments,
)
from query_graph.utils.highlight import (
    CATEGORY_CTE,
    CATEGORY_SUBQUERY,
    CATEGORY_TABLE,
    highlight_position,
    node_category,
)

SIMPLE_JOIN = "SELECT * FROM orders o JOIN customers c ON o.customer_id = c.id"


class TestNodeCategory:
    """Tests for node_category."""

    def test_categories(self):
        """Test MAIN and JOIN share the table category."""
        assert node_category(NodeKind.MAIN) == CATEGORY_TABLE
        assert node_category(NodeKind.JOIN) == CATEGORY_TABLE
        assert node_category(NodeKind.CTE) == CATEGORY_CTE
        assert node_category(NodeKind.SUBQUERY) == CATEGORY_SUBQUERY


class TestHighlightSegments:
    """Tests for highlight_segments."""

    def test_simple_join(self):
        """Test plain and highlighted runs alternate in text order."""
        segments = highlight_segments(SIMPLE_JOIN, extract_graph(SIMPLE_JOIN).nodes)

        assert [(s.start, s.end, s.node_id) for s in segments] == [
            (0, 21, None),
            (21, 22, "O"),
            (22, 38, None),
            (38, 39, "C"),
            (39, len(SIMPLE_JOIN), None),
        ]
        assert "".join(s.text for s in segments) == SIMPLE_JOIN

    def test_kind_carried(self):
        """Test highlighted segments carry the node kind."""
        sql = "WITH recent AS (SELECT * FROM events e) SELECT * FROM recent r"
        segments = highlight_segments(sql, extract_graph(sql).nodes)
        highlighted = [(s.text, s.kind) for s in segments if s.is_highlighted]
        assert highlighted == [
            ("recent", NodeKind.CTE),
            ("e", NodeKind.JOIN),
            ("r", NodeKind.JOIN),
        ]

    def test_overlapping_span_skipped(self):
        """Test a node overlapping an earlier one is not highlighted."""
        nodes = [
            GraphNode("A", "abc", "abc", NodeKind.MAIN, SourceSpan(0, 3)),
            GraphNode("B", "bc", "bc", NodeKind.JOIN, SourceSpan(1, 3)),
        ]
        segments = highlight_segments("abc def", nodes)
        assert [s.node_id for s in segments] == ["A", None]

    def test_out_of_range_and_unlocated_skipped(self):
        """Test nodes beyond the text or without location are ignored."""
        nodes = [
            GraphNode("A", "a", "a", NodeKind.MAIN, SourceSpan(50, 51)),
            GraphNode("B", "b", "b", NodeKind.JOIN),
        ]
        segments = highlight_segments("select 1", nodes)
        assert [(s.text, s.is_highlighted) for s in segments] == [
            ("select 1", False)
        ]

    def test_empty_text(self):
        """Test empty text yields no segments."""
        assert highlight_segments("", []) == []


class TestHighlightPosition:
    """Tests for highlight_position."""

    def test_single_line(self):
        """Test carets under a word on one line."""
        output = highlight_position("SELECT id FROM users", 15, length=5)
        assert output == "  1 | SELECT id FROM users\n" + " " * 21 + "^^^^^"

    def test_second_line(self):
        """Test the caret lands on the right line and column."""
        output = highlight_position("SELECT *\nFROM t", 14)
        assert output.splitlines() == [
            "  1 | SELECT *",
            "  2 | FROM t",
            " " * 11 + "^",
        ]

    def test_context_lines(self):
        """Test context is limited around the target line."""
        sql = "\n".join(f"line{i}" for i in range(10))
        output = highlight_position(sql, sql.index("line5"), context_lines=1)
        assert [l for l in output.splitlines() if "|" in l] == [
            "  5 | line4",
            "  6 | line5",
            "  7 | line6",
        ]
