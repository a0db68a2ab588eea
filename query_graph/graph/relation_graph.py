"""
Relation graph for extracted queries.

This module defines the RelationGraph class, which loads an SqlGraph into
networkx to answer structural questions about it (which relations are
joined to which, what a CTE is built from, where it is used).
"""

from __future__ import annotations

from typing import Any

import networkx as nx

from query_graph.models.graph import SqlGraph
from query_graph.models.link import LinkKind
from query_graph.models.node import NodeKind


class RelationGraph:
    """networkx view over an SqlGraph.

    Nodes are keyed by node id and carry ``table_name``, ``alias`` and
    ``kind`` attributes. Edges are keyed by LinkKind value, so a pair of
    nodes may carry both a JOIN and a structural edge.

    Attributes:
        graph: networkx MultiDiGraph.

    Example:
        >>> graph = RelationGraph.from_sql_graph(extract_graph(sql))
        >>> graph.joined_with("O")
        {'C'}
    """

    def __init__(self) -> None:
        self.graph = nx.MultiDiGraph()

    @classmethod
    def from_sql_graph(cls, sql_graph: SqlGraph) -> RelationGraph:
        relation_graph = cls()
        for node in sql_graph.nodes:
            relation_graph.graph.add_node(
                node.id,
                table_name=node.table_name,
                alias=node.alias,
                kind=node.kind.value,
            )
        for link in sql_graph.links:
            relation_graph.graph.add_edge(
                link.source,
                link.target,
                key=link.kind.value,
                kind=link.kind.value,
                condition=link.condition,
            )
        return relation_graph

    def _edges_of_kind(self, kind: LinkKind) -> list[tuple[str, str, dict]]:
        return [
            (u, v, data)
            for u, v, key, data in self.graph.edges(keys=True, data=True)
            if key == kind.value
        ]

    def joined_with(self, node_id: str) -> set[str]:
        """Ids joined to ``node_id`` by a JOIN link in either direction."""
        neighbours: set[str] = set()
        for u, v, _ in self._edges_of_kind(LinkKind.JOIN):
            if u == node_id:
                neighbours.add(v)
            elif v == node_id:
                neighbours.add(u)
        return neighbours

    def cte_members(self, cte_id: str) -> set[str]:
        """Ids of relations referenced inside the body of ``cte_id``."""
        return {
            u for u, v, _ in self._edges_of_kind(LinkKind.CTE_DEF) if v == cte_id
        }

    def instances_of(self, cte_id: str) -> set[str]:
        """Ids of aliased usages of ``cte_id``."""
        return {
            v for u, v, _ in self._edges_of_kind(LinkKind.INSTANCE) if u == cte_id
        }

    def upstream_of(self, node_id: str) -> set[str]:
        """All ids with a directed path to ``node_id``."""
        if node_id not in self.graph:
            return set()
        return set(nx.ancestors(self.graph, node_id))

    def connected_groups(self) -> list[list[str]]:
        """Weakly connected components, each sorted, largest first."""
        groups = [
            sorted(component)
            for component in nx.weakly_connected_components(self.graph)
        ]
        return sorted(groups, key=lambda group: (-len(group), group))

    def get_statistics(self) -> dict[str, int]:
        """Count nodes and links, in total and by kind.

        Example:
            >>> stats = graph.get_statistics()
            >>> stats["total_nodes"], stats["join_links"]
            (2, 1)
        """
        stats: dict[str, int] = {
            "total_nodes": self.graph.number_of_nodes(),
            "total_links": self.graph.number_of_edges(),
        }
        for kind in NodeKind:
            stats[f"{kind.value.lower()}_nodes"] = sum(
                1
                for _, data in self.graph.nodes(data=True)
                if data.get("kind") == kind.value
            )
        for kind in LinkKind:
            stats[f"{kind.value.lower()}_links"] = len(self._edges_of_kind(kind))
        stats["components"] = (
            nx.number_weakly_connected_components(self.graph)
            if self.graph.number_of_nodes()
            else 0
        )
        return stats

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Export graph to dictionary format."""
        return {
            "nodes": [
                {"id": node, **data} for node, data in self.graph.nodes(data=True)
            ],
            "edges": [
                {"source": u, "target": v, **data}
                for u, v, data in self.graph.edges(data=True)
            ],
        }

    def to_dot(self) -> str:
        """Export graph to Graphviz DOT format.

        Structural links are drawn dashed, JOIN links solid and labelled
        with their condition.
        """
        lines = ["digraph G {"]
        for node_id, data in self.graph.nodes(data=True):
            shape = "box" if data.get("kind") == NodeKind.CTE.value else "ellipse"
            label = _dot_escape(f"{data.get('alias')} ({data.get('table_name')})")
            lines.append(f'  "{node_id}" [label="{label}", shape={shape}];')
        for u, v, key, data in self.graph.edges(keys=True, data=True):
            if key == LinkKind.JOIN.value:
                label = _dot_escape(data.get("condition", ""))
                lines.append(f'  "{u}" -> "{v}" [label="{label}"];')
            else:
                lines.append(f'  "{u}" -> "{v}" [label="{key}", style=dashed];')
        lines.append("}")
        return "\n".join(lines)


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
