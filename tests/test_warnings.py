"""
Tests for the diagnostics collector.
"""

import pytest

from query_graph.utils.warnings import ExtractionWarning, WarningCollector


class TestExtractionWarning:
    """Tests for ExtractionWarning."""

    def test_invalid_level(self):
        """Test unknown levels are rejected."""
        with pytest.raises(ValueError):
            ExtractionWarning(level="DEBUG", message="x")

    def test_to_dict(self):
        """Test dictionary conversion."""
        warning = ExtractionWarning("INFO", "note", context="a.x = b.y", position=4)
        assert warning.to_dict() == {
            "level": "INFO",
            "message": "note",
            "context": "a.x = b.y",
            "position": 4,
        }


class TestWarningCollector:
    """Tests for WarningCollector."""

    def test_add_and_filter(self):
        """Test adding warnings and filtering by level."""
        collector = WarningCollector()
        collector.add("INFO", "one")
        collector.add("WARNING", "two")
        collector.add("INFO", "three")

        assert [w.message for w in collector.get_by_level("INFO")] == ["one", "three"]
        assert not collector.has_errors()
        assert collector.get_summary() == {"INFO": 2, "WARNING": 1, "ERROR": 0}

    def test_get_all_returns_copy(self):
        """Test the returned list is independent of the collector."""
        collector = WarningCollector()
        collector.add("INFO", "one")
        snapshot = collector.get_all()
        collector.add("INFO", "two")
        assert len(snapshot) == 1

    def test_disabled_collector_drops(self):
        """Test a disabled collector records nothing."""
        collector = WarningCollector(enabled=False)
        collector.add("ERROR", "ignored")
        assert collector.get_all() == []
        assert not collector.has_errors()

    def test_disabled_collector_still_validates(self):
        """Test invalid levels raise even when disabled."""
        with pytest.raises(ValueError):
            WarningCollector(enabled=False).add("LOUD", "x")

    def test_clear(self):
        """Test clearing the collector."""
        collector = WarningCollector()
        collector.add("ERROR", "x")
        collector.clear()
        assert collector.get_all() == []

    def test_unbalanced_cte_warning(self):
        """Test the unbalanced CTE helper."""
        collector = WarningCollector()
        collector.add_unbalanced_cte_warning("recent", 15)

        warning = collector.get_all()[0]
        assert warning.level == "WARNING"
        assert "recent" in warning.message
        assert warning.position == 15

    def test_unresolved_alias_info(self):
        """Test the unresolved alias helper keeps the condition as context."""
        collector = WarningCollector()
        collector.add_unresolved_join_alias_info("a.x = zz.y", "zz", 30)

        warning = collector.get_all()[0]
        assert warning.level == "INFO"
        assert warning.context == "a.x = zz.y"
        assert warning.position == 30

    def test_internal_error(self):
        """Test the internal error helper names the exception type."""
        collector = WarningCollector()
        collector.add_internal_error(KeyError("node"))

        assert collector.has_errors()
        assert "KeyError" in collector.get_all()[0].message
