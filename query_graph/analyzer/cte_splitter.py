"""
WITH clause splitting.

This module defines the CTESplitter class, which walks the WITH clause of a
masked statement, registers each common table expression, hands each body to
the ScopeAnalyzer, and reports where the main query begins.
"""

from __future__ import annotations

import re
from typing import Optional

from query_graph.analyzer.graph_builder import GraphBuilder
from query_graph.analyzer.scope_analyzer import ScopeAnalyzer
from query_graph.exceptions import UnbalancedParenthesisError
from query_graph.models.node import GraphNode, NodeKind, SourceSpan

WITH_PATTERN = re.compile(
    r"(?<![A-Za-z0-9_$])WITH\s+(?:RECURSIVE\s+)?", re.IGNORECASE
)
CTE_HEAD_PATTERN = re.compile(r"\s*([A-Za-z0-9_$]+)\s+AS\s*\(", re.IGNORECASE)
CTE_SEPARATOR_PATTERN = re.compile(r"\s*,")


def find_balanced_paren(sql: str, open_index: int) -> Optional[int]:
    """Find the parenthesis that closes the one at ``open_index``.

    Args:
        sql: Text to scan.
        open_index: Offset of an opening parenthesis.

    Returns:
        Offset of the matching closing parenthesis, or None if the text ends
        before the depth returns to zero.

    Example:
        >>> find_balanced_paren("(a (b) c) d", 0)
        8
    """
    depth = 0
    for index in range(open_index, len(sql)):
        char = sql[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if depth == 0:
            return index
    return None


class CTESplitter:
    """
    WITH clause splitter.

    Responsibilities:
    1. Find the WITH keyword and parse ``name AS (`` heads one by one
    2. Add a CTE node for each definition and analyze its body as a scope
       owned by that CTE
    3. Return the offset where the main query starts

    Usage:
        splitter = CTESplitter(scope_analyzer)
        main_start = splitter.split(masked_sql, builder)
    """

    def __init__(self, scope_analyzer: ScopeAnalyzer) -> None:
        self.scope_analyzer = scope_analyzer

    def split(self, sql: str, builder: GraphBuilder) -> int:
        """Process the WITH clause of ``sql``.

        Args:
            sql: Masked statement text.
            builder: Accumulator for nodes and links.

        Returns:
            Offset in ``sql`` where the main query starts. 0 when there is no
            WITH clause.

        Raises:
            UnbalancedParenthesisError: If a CTE body is never closed. CTEs
                processed before that point stay in ``builder``.
        """
        with_match = WITH_PATTERN.search(sql)
        if not with_match:
            return 0

        cursor = with_match.end()
        while True:
            head = CTE_HEAD_PATTERN.match(sql, cursor)
            if not head:
                return cursor

            cte_name = head.group(1)
            cte_id = builder.register_cte(cte_name)
            builder.add_node(
                GraphNode(
                    id=cte_id,
                    table_name=cte_name,
                    alias=cte_name,
                    kind=NodeKind.CTE,
                    location=SourceSpan(head.start(1), head.end(1)),
                )
            )

            open_paren = head.end() - 1
            close_paren = find_balanced_paren(sql, open_paren)
            if close_paren is None:
                raise UnbalancedParenthesisError(cte_name, open_paren)

            body_start = open_paren + 1
            self.scope_analyzer.analyze(
                sql[body_start:close_paren], body_start, builder, owner=cte_id
            )

            cursor = close_paren + 1
            separator = CTE_SEPARATOR_PATTERN.match(sql, cursor)
            if not separator:
                return cursor
            cursor = separator.end()
