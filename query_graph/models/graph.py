"""
Extracted graph model.

This module defines SqlGraph, the immutable result of one extraction: the
nodes and links in the order they were discovered.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from query_graph.models.link import GraphLink, LinkKind
from query_graph.models.node import GraphNode, NodeKind


@dataclass(frozen=True)
class SqlGraph:
    """Nodes and links discovered in a SQL statement.

    Both sequences are tuples in discovery order. An empty graph is what the
    public entry point returns both for text with no recognizable tables and
    for an extraction that failed internally.

    Attributes:
        nodes: Tuple of GraphNode objects.
        links: Tuple of GraphLink objects.

    Example:
        >>> graph = extract_graph("SELECT * FROM orders o")
        >>> [n.id for n in graph.nodes]
        ['O']
    """

    nodes: tuple[GraphNode, ...] = ()
    links: tuple[GraphLink, ...] = ()

    @classmethod
    def empty(cls) -> SqlGraph:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.links

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Look up a node by id (case-insensitive)."""
        wanted = node_id.upper()
        for node in self.nodes:
            if node.id == wanted:
                return node
        return None

    def nodes_of_kind(self, kind: NodeKind) -> list[GraphNode]:
        return [node for node in self.nodes if node.kind == kind]

    def links_of_kind(self, kind: LinkKind) -> list[GraphLink]:
        return [link for link in self.links if link.kind == kind]

    def located_nodes(self) -> list[GraphNode]:
        """Nodes that carry a location, sorted by start offset."""
        located = [node for node in self.nodes if node.location is not None]
        return sorted(located, key=lambda n: n.location.start)

    def shifted(self, offset: int) -> SqlGraph:
        """Return a copy whose node locations are moved right by ``offset``.

        Used when a statement was extracted from a slice of a larger script.
        """
        if offset == 0:
            return self
        return SqlGraph(
            nodes=tuple(node.shifted(offset) for node in self.nodes),
            links=self.links,
        )

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Convert graph to the ``{"nodes": [...], "links": [...]}`` shape."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_relation_graph(self) -> "RelationGraph":
        """Convert to a networkx-backed RelationGraph for querying."""
        from query_graph.graph.relation_graph import RelationGraph

        return RelationGraph.from_sql_graph(self)
