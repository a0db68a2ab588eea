"""
Join graph extractor main entry point.

This module defines the GraphExtractor class and the ``extract_graph`` /
``parse_sql_query`` functions, which run the whole pipeline on one SQL
statement: comment masking, WITH clause splitting, and scope analysis of the
main query.
"""

from __future__ import annotations

import logging
from typing import Optional

from query_graph.analyzer.cte_splitter import CTESplitter
from query_graph.analyzer.graph_builder import GraphBuilder
from query_graph.analyzer.scope_analyzer import ScopeAnalyzer
from query_graph.exceptions import GraphExtractionError, UnbalancedParenthesisError
from query_graph.models.config import ErrorMode, ExtractorConfig
from query_graph.models.graph import SqlGraph
from query_graph.models.result import ExtractionOutcome
from query_graph.parser.comment_mask import mask_comments
from query_graph.utils.warnings import WarningCollector

logger = logging.getLogger(__name__)


class GraphExtractor:
    """Join graph extractor - main entry point.

    Each call builds a fresh GraphBuilder, so an extractor holds no state
    between calls and can be reused.

    Usage:
        >>> extractor = GraphExtractor()
        >>> outcome = extractor.extract_with_diagnostics(
        ...     "SELECT * FROM orders o JOIN customers c ON o.cid = c.id"
        ... )
        >>> [n.id for n in outcome.graph.nodes]
        ['O', 'C']

    Attributes:
        config: ExtractorConfig controlling fault handling and keywords.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None) -> None:
        self.config = config or ExtractorConfig()

    def extract(self, sql: str) -> SqlGraph:
        """Extract the graph of ``sql``.

        Returns an empty graph if extraction failed internally (unless the
        config says FAIL, in which case GraphExtractionError is raised).
        """
        return self.extract_with_diagnostics(sql).graph

    def extract_with_diagnostics(self, sql: str) -> ExtractionOutcome:
        """Extract the graph of ``sql`` along with diagnostics.

        Steps:
        1. Mask comments (length preserving)
        2. Split the WITH clause; each CTE body is analyzed as its own scope
        3. Analyze the main query as the top-level scope

        Args:
            sql: Raw SQL text of one statement.

        Returns:
            ExtractionOutcome. On an internal fault the outcome is failed and
            its graph is empty.

        Raises:
            GraphExtractionError: Only with on_internal_error=ErrorMode.FAIL.
        """
        warnings = WarningCollector(enabled=self.config.collect_warnings)

        try:
            graph = self._run(sql, warnings)
        except Exception as e:
            if self.config.on_internal_error == ErrorMode.FAIL:
                raise GraphExtractionError(
                    f"Unexpected error during extraction: {e}", sql=sql
                ) from e
            logger.debug("Graph extraction failed", exc_info=True)
            if self.config.on_internal_error == ErrorMode.WARN:
                warnings.add_internal_error(e)
            return ExtractionOutcome.failed(sql, str(e), warnings.get_all())

        return ExtractionOutcome.ok(graph, sql, warnings.get_all())

    def _run(self, sql: str, warnings: WarningCollector) -> SqlGraph:
        masked = mask_comments(sql)
        builder = GraphBuilder()
        scope_analyzer = ScopeAnalyzer(self.config, warnings)

        try:
            main_start = CTESplitter(scope_analyzer).split(masked, builder)
        except UnbalancedParenthesisError as e:
            warnings.add_unbalanced_cte_warning(e.cte_name, e.position)
            main_start = 0

        scope_analyzer.analyze(masked[main_start:], main_start, builder)
        return builder.build()


_default_extractor = GraphExtractor()


def extract_graph(sql: str) -> SqlGraph:
    """Extract tables, CTEs and join links from one SQL statement.

    Never raises: any internal failure yields an empty graph, which is the
    same value returned for text without recognizable tables.

    Example:
        >>> graph = extract_graph("SELECT * FROM orders o JOIN customers c ON o.cid = c.id")
        >>> [(l.source, l.target, l.condition) for l in graph.links]
        [('O', 'C', 'o.cid = c.id')]
    """
    return _default_extractor.extract(sql)


async def parse_sql_query(sql: str) -> SqlGraph:
    """Coroutine wrapper around extract_graph for async callers.

    Extraction runs to completion inline; there are no suspension points.
    """
    return extract_graph(sql)
