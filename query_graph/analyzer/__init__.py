"""
Extraction module.

This package contains the GraphBuilder accumulator, the ScopeAnalyzer that
scans one scope for table references and join conditions, the CTESplitter
that walks the WITH clause, and the GraphExtractor entry point.
"""

from query_graph.analyzer.graph_builder import GraphBuilder
from query_graph.analyzer.scope_analyzer import ScopeAnalyzer
from query_graph.analyzer.cte_splitter import CTESplitter
from query_graph.analyzer.graph_extractor import (
    GraphExtractor,
    extract_graph,
    parse_sql_query,
)

__all__ = [
    "CTESplitter",
    "GraphBuilder",
    "GraphExtractor",
    "ScopeAnalyzer",
    "extract_graph",
    "parse_sql_query",
]
