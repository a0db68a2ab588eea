"""
Data models for join graph extraction.

This package contains the nodes, links and graph produced by extraction,
the extractor configuration, and the extraction outcome.
"""

from query_graph.models.config import ErrorMode, ExtractorConfig
from query_graph.models.node import GraphNode, NodeKind, SourceSpan
from query_graph.models.link import GraphLink, LinkKind
from query_graph.models.graph import SqlGraph
from query_graph.models.result import AnalysisStatus, ExtractionOutcome

__all__ = [
    "AnalysisStatus",
    "ErrorMode",
    "ExtractionOutcome",
    "ExtractorConfig",
    "GraphLink",
    "GraphNode",
    "LinkKind",
    "NodeKind",
    "SourceSpan",
    "SqlGraph",
]
