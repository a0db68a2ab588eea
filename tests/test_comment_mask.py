"""
Tests for comment masking.
"""

import pytest

from query_graph import mask_comments


class TestMaskComments:
    """Tests for mask_comments."""

    def test_line_comment(self):
        """Test a trailing line comment becomes spaces."""
        assert mask_comments("SELECT 1 -- note") == "SELECT 1        "

    def test_line_comment_stops_at_newline(self):
        """Test a line comment does not swallow the next line."""
        assert mask_comments("x -- c\ny") == "x     \ny"

    def test_block_comment_spanning_lines(self):
        """Test a multi-line block comment is blanked, newlines included."""
        sql = "a /* x\ny */ b"
        assert mask_comments(sql) == "a " + " " * 9 + " b"

    def test_block_comment_is_non_greedy(self):
        """Test two block comments keep the code between them."""
        sql = "/* a */ FROM t /* b */"
        assert mask_comments(sql) == "        FROM t        "

    def test_unterminated_block_comment_masks_to_end(self):
        """Test an unterminated block comment runs to end of input."""
        sql = "SELECT a /* rest\nFROM t"
        masked = mask_comments(sql)
        assert masked == "SELECT a " + " " * (len(sql) - 9)

    def test_line_marker_inside_block_comment(self):
        """Test '--' inside a block comment does not mask code after it."""
        sql = "/* -- */ FROM t"
        assert mask_comments(sql) == "         FROM t"

    def test_no_comments_unchanged(self):
        """Test text without comments is returned unchanged."""
        sql = "SELECT a - b FROM t WHERE x = '/'"
        assert mask_comments(sql) == sql

    @pytest.mark.parametrize(
        "sql",
        [
            "",
            "-- only a comment",
            "/* */",
            "SELECT 1 /* a */ -- b\n/* c\n d */ FROM t -- e",
            "/* never closed",
        ],
    )
    def test_length_preserved(self, sql):
        """Test masking never changes the length of the text."""
        assert len(mask_comments(sql)) == len(sql)

    def test_code_characters_unchanged(self):
        """Test characters outside comments keep their positions."""
        sql = "SELECT * /* c */ FROM orders o -- tail\nJOIN c ON o.id = c.id"
        masked = mask_comments(sql)
        for index in (sql.index("orders"), sql.index("JOIN"), sql.index("c.id")):
            assert masked[index] == sql[index]
