"""
Tests for CLI functionality (end-to-end).

These tests run the command-line interface in a subprocess and check its
output.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

SIMPLE_JOIN = "SELECT * FROM orders o JOIN customers c ON o.customer_id = c.id"
SCRIPT = (
    "SELECT * FROM orders o JOIN customers c ON o.customer_id = c.id;\n"
    "WITH recent AS (SELECT * FROM events e) SELECT * FROM recent r;\n"
)


def run_cli(*args, stdin=None):
    """Run CLI command."""
    env = dict(os.environ)
    env["PYTHONIOENCODING"] = "utf-8"
    cmd = [sys.executable, "-m", "query_graph.cli"] + list(args)
    return subprocess.run(
        cmd,
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        cwd=Path.cwd(),
        env=env,
    )


@pytest.fixture
def join_file(tmp_path):
    path = tmp_path / "join.sql"
    path.write_text(SIMPLE_JOIN, encoding="utf-8")
    return path


@pytest.fixture
def script_file(tmp_path):
    path = tmp_path / "script.sql"
    path.write_text(SCRIPT, encoding="utf-8")
    return path


class TestCLI:
    """Test CLI functionality (end-to-end)."""

    def test_pretty_output(self, join_file):
        """Test the default summary."""
        result = run_cli(str(join_file), "--no-color")

        assert result.returncode == 0
        assert "[OK] Found 2 node(s) and 1 link(s)" in result.stdout
        assert "O -> C [JOIN] o.customer_id = c.id" in result.stdout

    def test_json_output(self, join_file):
        """Test JSON output parses and has the wire shape."""
        result = run_cli(str(join_file), "--format", "json")

        assert result.returncode == 0
        data = json.loads(result.stdout)
        statement = data["statements"][0]
        assert statement["status"] == "SUCCESS"
        assert [n["id"] for n in statement["nodes"]] == ["O", "C"]
        assert statement["nodes"][0]["location"] == {"start": 21, "end": 22}
        assert statement["links"][0]["joinType"] == "JOIN"

    def test_table_output(self, join_file):
        """Test tabulated nodes and links."""
        result = run_cli(str(join_file), "--format", "table", "--no-color")

        assert result.returncode == 0
        assert "Location" in result.stdout
        assert "21-22" in result.stdout
        assert "Condition" in result.stdout

    def test_highlight_without_color(self, join_file):
        """Test located nodes are bracketed when color is off."""
        result = run_cli(str(join_file), "--highlight", "--no-color")

        assert result.returncode == 0
        assert (
            "SELECT * FROM orders [o] JOIN customers [c] ON o.customer_id = c.id"
            in result.stdout
        )

    def test_stats(self, join_file):
        """Test statistics output."""
        result = run_cli(str(join_file), "--stats", "--no-color")

        assert result.returncode == 0
        assert "join_links" in result.stdout

    def test_script_offsets_are_absolute(self, script_file):
        """Test locations in later statements are file offsets."""
        result = run_cli(str(script_file), "--format", "json")

        assert result.returncode == 0
        statements = json.loads(result.stdout)["statements"]
        assert len(statements) == 2

        second = statements[1]
        recent = next(n for n in second["nodes"] if n["id"] == "RECENT")
        r = next(n for n in second["nodes"] if n["id"] == "R")
        assert recent["location"]["start"] == SCRIPT.index("recent")
        assert r["location"] == {
            "start": SCRIPT.rindex(" r;") + 1,
            "end": SCRIPT.rindex(" r;") + 2,
        }

    def test_multiple_statements_numbered(self, script_file):
        """Test each statement gets a header."""
        result = run_cli(str(script_file), "--no-color")
        assert "=== Statement 1" in result.stdout
        assert "=== Statement 2" in result.stdout

    def test_stdin(self):
        """Test reading SQL from stdin."""
        result = run_cli("-", "--format", "json", stdin=SIMPLE_JOIN)

        assert result.returncode == 0
        assert json.loads(result.stdout)["statements"][0]["nodes"]

    def test_dot_output(self, join_file):
        """Test Graphviz output."""
        result = run_cli(str(join_file), "--format", "dot")

        assert result.returncode == 0
        assert result.stdout.startswith("digraph G {")

    def test_export(self, join_file, tmp_path):
        """Test exporting graphs to a JSON file."""
        output = tmp_path / "graph.json"
        result = run_cli(str(join_file), "--no-color", "--export", str(output))

        assert result.returncode == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["statements"][0]["links"][0]["source"] == "O"

    def test_unrecognized_text(self, tmp_path):
        """Test text without tables reports nothing found."""
        path = tmp_path / "junk.sql"
        path.write_text("hello world", encoding="utf-8")
        result = run_cli(str(path), "--no-color")

        assert result.returncode == 0
        assert "No tables recognized" in result.stdout

    def test_unterminated_cte_warning(self, tmp_path):
        """Test the fallback warning is shown with a caret excerpt."""
        path = tmp_path / "broken.sql"
        path.write_text("WITH x AS (SELECT * FROM t", encoding="utf-8")
        result = run_cli(str(path), "--no-color")

        assert result.returncode == 0
        assert "[WARNING]" in result.stdout
        assert "^" in result.stdout

    def test_missing_file(self, tmp_path):
        """Test a missing input file exits with an error."""
        result = run_cli(str(tmp_path / "nope.sql"))

        assert result.returncode == 1
        assert "File not found" in result.stderr

    def test_empty_file(self, tmp_path):
        """Test a file without statements exits with an error."""
        path = tmp_path / "empty.sql"
        path.write_text("   \n", encoding="utf-8")
        result = run_cli(str(path), "--no-color")

        assert result.returncode == 1
        assert "No SQL statements found" in result.stdout
