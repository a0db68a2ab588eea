"""
Relation graph module.

This package contains the networkx-backed RelationGraph used to query the
structure of an extracted graph.
"""

from query_graph.graph.relation_graph import RelationGraph

__all__ = [
    "RelationGraph",
]
