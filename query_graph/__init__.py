"""
SQL Join Graph Extractor v1.0

Extracts tables, common table expressions and join relationships from a
single SQL SELECT statement, with character offsets into the original text
for every located identifier.

Example:
    >>> from query_graph import extract_graph
    >>> graph = extract_graph("SELECT * FROM orders o JOIN customers c ON o.cid = c.id")
    >>> [(n.id, n.kind.value) for n in graph.nodes]
    [('O', 'MAIN'), ('C', 'JOIN')]
"""

from query_graph.version import __version__, __version_info__

__author__ = "Query Graph Contributors"

from query_graph.analyzer.graph_extractor import (
    GraphExtractor,
    extract_graph,
    parse_sql_query,
)
from query_graph.exceptions import (
    GraphExtractionError,
    QueryGraphError,
    UnbalancedParenthesisError,
)
from query_graph.graph.relation_graph import RelationGraph
from query_graph.models.config import ErrorMode, ExtractorConfig
from query_graph.models.graph import SqlGraph
from query_graph.models.link import GraphLink, LinkKind
from query_graph.models.node import GraphNode, NodeKind, SourceSpan
from query_graph.models.result import AnalysisStatus, ExtractionOutcome
from query_graph.parser.comment_mask import mask_comments
from query_graph.parser.script_splitter import ScriptSplitter, StatementSpan
from query_graph.utils.highlight import HighlightSegment, highlight_segments

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Entry points
    "extract_graph",
    "parse_sql_query",
    "GraphExtractor",
    # Configuration
    "ExtractorConfig",
    "ErrorMode",
    # Results
    "SqlGraph",
    "ExtractionOutcome",
    "AnalysisStatus",
    # Data models
    "GraphNode",
    "GraphLink",
    "NodeKind",
    "LinkKind",
    "SourceSpan",
    # Graph queries
    "RelationGraph",
    # Exceptions
    "QueryGraphError",
    "GraphExtractionError",
    "UnbalancedParenthesisError",
    # Parser
    "mask_comments",
    "ScriptSplitter",
    "StatementSpan",
    # Highlighting
    "HighlightSegment",
    "highlight_segments",
]
