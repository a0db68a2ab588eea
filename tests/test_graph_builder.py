"""
Tests for the GraphBuilder accumulator.
"""

from query_graph import GraphNode, LinkKind, NodeKind, SourceSpan
from query_graph.analyzer.graph_builder import GraphBuilder


class TestGraphBuilder:
    """Tests for GraphBuilder."""

    def test_first_node_wins(self):
        """Test a second node with the same id is ignored."""
        builder = GraphBuilder()
        assert builder.add_node(GraphNode("O", "orders", "o", NodeKind.MAIN))
        assert not builder.add_node(
            GraphNode("O", "other", "o", NodeKind.JOIN, SourceSpan(0, 1))
        )

        node = builder.get_node("O")
        assert node.table_name == "orders"
        assert node.location is None  # never backfilled

    def test_structural_links_dedup_by_triple(self):
        """Test CTE_DEF / INSTANCE links are unique per direction and kind."""
        builder = GraphBuilder()
        assert builder.add_link("T", "C", LinkKind.CTE_DEF, "defines")
        assert not builder.add_link("T", "C", LinkKind.CTE_DEF, "defines")
        assert builder.add_link("C", "T", LinkKind.CTE_DEF, "defines")
        assert builder.add_link("T", "C", LinkKind.INSTANCE, "usage")
        assert len(builder.build().links) == 3

    def test_join_links_dedup_undirected(self):
        """Test a JOIN link in either direction blocks another one."""
        builder = GraphBuilder()
        assert builder.add_link("A", "B", LinkKind.JOIN, "a.x = b.x")
        assert not builder.add_link("B", "A", LinkKind.JOIN, "b.y = a.y")
        assert not builder.add_link("A", "B", LinkKind.JOIN, "a.z = b.z")
        assert builder.has_join_between("B", "A")

        links = builder.build().links
        assert len(links) == 1
        assert links[0].condition == "a.x = b.x"

    def test_structural_link_does_not_block_join(self):
        """Test only JOIN links count for JOIN deduplication."""
        builder = GraphBuilder()
        builder.add_link("R", "R2", LinkKind.INSTANCE, "usage")
        assert builder.add_link("R", "R2", LinkKind.JOIN, "r.id = r2.pid")

    def test_cte_registry_is_case_insensitive(self):
        """Test CTE names are registered uppercased."""
        builder = GraphBuilder()
        assert builder.register_cte("Recent") == "RECENT"
        assert builder.is_cte("recent")
        assert not builder.is_cte("events")

    def test_build_is_snapshot(self):
        """Test a built graph is not affected by later additions."""
        builder = GraphBuilder()
        builder.add_node(GraphNode("A", "a", "a", NodeKind.MAIN))
        graph = builder.build()
        builder.add_node(GraphNode("B", "b", "b", NodeKind.JOIN))

        assert [n.id for n in graph.nodes] == ["A"]
        assert [n.id for n in builder.build().nodes] == ["A", "B"]
