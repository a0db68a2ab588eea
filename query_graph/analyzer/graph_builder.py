"""
Mutable accumulator for one extraction.

This module defines GraphBuilder, which the CTE splitter and the scope
analyzer share while walking a statement. It owns the node and link
collections and enforces the identity and deduplication rules.
"""

from __future__ import annotations

from typing import Optional

from query_graph.models.graph import SqlGraph
from query_graph.models.link import GraphLink, LinkKind
from query_graph.models.node import GraphNode


class GraphBuilder:
    """Node and link accumulator.

    Rules enforced here:
    1. One node per id; the first node added for an id wins and later
       additions are ignored, even when the existing node has no location.
    2. CTE_DEF and INSTANCE links are unique by (source, target, kind).
    3. JOIN links are unique by the unordered pair of endpoints.

    Attributes:
        cte_names: Uppercased names of CTEs defined so far.

    Example:
        >>> builder = GraphBuilder()
        >>> builder.add_node(GraphNode("O", "orders", "o", NodeKind.MAIN))
        True
        >>> builder.add_node(GraphNode("O", "other", "o", NodeKind.JOIN))
        False
    """

    def __init__(self) -> None:
        self._nodes: list[GraphNode] = []
        self._node_index: dict[str, GraphNode] = {}
        self._links: list[GraphLink] = []
        self._link_keys: set[tuple[str, str, LinkKind]] = set()
        self._join_pairs: set[frozenset[str]] = set()
        self.cte_names: set[str] = set()

    def has_node(self, node_id: str) -> bool:
        return node_id in self._node_index

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self._node_index.get(node_id)

    def add_node(self, node: GraphNode) -> bool:
        """Add a node unless its id is already taken.

        Returns:
            True if the node was added, False if an earlier node kept the id.
        """
        if node.id in self._node_index:
            return False
        self._nodes.append(node)
        self._node_index[node.id] = node
        return True

    def register_cte(self, name: str) -> str:
        """Remember a CTE name and return its normalized id."""
        cte_id = name.upper()
        self.cte_names.add(cte_id)
        return cte_id

    def is_cte(self, table_name: str) -> bool:
        return table_name.upper() in self.cte_names

    def add_link(
        self, source: str, target: str, kind: LinkKind, condition: str
    ) -> bool:
        """Add a link unless an equivalent one exists.

        Returns:
            True if the link was added.
        """
        if kind is LinkKind.JOIN:
            pair = frozenset((source, target))
            if pair in self._join_pairs:
                return False
            self._join_pairs.add(pair)
        else:
            key = (source, target, kind)
            if key in self._link_keys:
                return False
            self._link_keys.add(key)

        self._links.append(GraphLink(source, target, kind, condition))
        return True

    def has_join_between(self, a: str, b: str) -> bool:
        return frozenset((a, b)) in self._join_pairs

    def build(self) -> SqlGraph:
        """Return an immutable snapshot of everything added so far."""
        return SqlGraph(nodes=tuple(self._nodes), links=tuple(self._links))
