"""
Scope analysis: table references and join conditions.

This module defines ScopeAnalyzer, which turns one scope of masked SQL text
(a CTE body or the main query) into nodes and links on a GraphBuilder.

Two independent scans run over the scope:
1. Table references: FROM / JOIN keywords followed by a table name and an
   optional alias.
2. Join conditions: ``a.col = b.col`` style comparisons between aliases
   bound by the first scan.

Offsets found inside the scope are made absolute by adding the scope's
offset in the statement, so nested scopes report positions in the original
text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from query_graph.analyzer.graph_builder import GraphBuilder
from query_graph.models.config import DEFAULT_CLAUSE_KEYWORDS, ExtractorConfig
from query_graph.models.link import DEFINES_CONDITION, USAGE_CONDITION, LinkKind
from query_graph.models.node import GraphNode, NodeKind, SourceSpan
from query_graph.utils.warnings import WarningCollector

IDENTIFIER = r"[A-Za-z0-9_$]+"
NOT_AFTER_IDENTIFIER = r"(?<![A-Za-z0-9_$])"

TABLE_REFERENCE_PATTERN = re.compile(
    NOT_AFTER_IDENTIFIER
    + r"(FULL\s+OUTER\s+JOIN|LEFT\s+JOIN|RIGHT\s+JOIN|INNER\s+JOIN|CROSS\s+JOIN|FROM|JOIN)"
    + r"\s+("
    + IDENTIFIER
    + r"(?:\."
    + IDENTIFIER
    + r")*)",
    re.IGNORECASE,
)

# Optional AS, then an identifier that does not start with a digit.
# A bare AS with nothing after it is never an alias.
ALIAS_PATTERN = re.compile(
    r"\s*(?:AS\s+)?(?!AS(?![A-Za-z0-9_$]))"
    r"([A-Za-z_$][A-Za-z0-9_$]*)(?![A-Za-z0-9_$])",
    re.IGNORECASE,
)

JOIN_CONDITION_PATTERN = re.compile(
    NOT_AFTER_IDENTIFIER
    + r"("
    + IDENTIFIER
    + r")\."
    + IDENTIFIER
    + r"\s*(=|<>|!=)\s*("
    + IDENTIFIER
    + r")\."
    + IDENTIFIER
)


@dataclass(frozen=True)
class TableReference:
    """One FROM / JOIN target found in a scope.

    Offsets in ``table_span`` and ``alias_span`` are relative to the scope
    text.

    Attributes:
        keyword: Uppercased join keyword with whitespace collapsed
            ("FROM", "LEFT JOIN", "FULL OUTER JOIN", ...).
        table_name: Table name as written, possibly dotted.
        table_span: Span of the table name.
        alias: Alias as written, or the last segment of a dotted table name
            when none was written, or None.
        alias_span: Span of the alias when it was written, else None.
    """

    keyword: str
    table_name: str
    table_span: SourceSpan
    alias: Optional[str] = None
    alias_span: Optional[SourceSpan] = None

    @property
    def node_id(self) -> str:
        return (self.alias or self.table_name).upper()

    @property
    def display_alias(self) -> str:
        return self.alias or self.table_name

    @property
    def location(self) -> SourceSpan:
        """Span used to highlight this reference: alias first, then table."""
        return self.alias_span or self.table_span


@dataclass(frozen=True)
class JoinCondition:
    """A qualified-column comparison found in a scope.

    Attributes:
        left_alias: Alias qualifying the left column, as written.
        operator: "=", "<>" or "!=".
        right_alias: Alias qualifying the right column, as written.
        text: Full matched comparison text.
        start: Offset of the match in the scope text.
    """

    left_alias: str
    operator: str
    right_alias: str
    text: str
    start: int


def find_table_references(
    scope_sql: str, clause_keywords: Iterable[str] = DEFAULT_CLAUSE_KEYWORDS
) -> List[TableReference]:
    """Scan a scope for FROM / JOIN targets.

    The identifier right after the table name is an alias unless it is one
    of ``clause_keywords``. A dotted name without an alias uses its last
    segment as alias. Table names that are clause keywords are skipped.

    Args:
        scope_sql: Masked text of one scope.
        clause_keywords: Uppercase reserved words.

    Returns:
        TableReference objects in text order.

    Example:
        >>> [r.node_id for r in find_table_references("FROM a x JOIN s.b ON")]
        ['X', 'B']
    """
    keywords = frozenset(clause_keywords)
    references: List[TableReference] = []

    for match in TABLE_REFERENCE_PATTERN.finditer(scope_sql):
        keyword = " ".join(match.group(1).upper().split())
        table_name = match.group(2)
        if table_name.upper() in keywords:
            continue

        alias: Optional[str] = None
        alias_span: Optional[SourceSpan] = None
        alias_match = ALIAS_PATTERN.match(scope_sql, match.end())
        if alias_match and alias_match.group(1).upper() not in keywords:
            alias = alias_match.group(1)
            alias_span = SourceSpan(alias_match.start(1), alias_match.end(1))
        elif "." in table_name:
            alias = table_name.rsplit(".", 1)[1]

        references.append(
            TableReference(
                keyword=keyword,
                table_name=table_name,
                table_span=SourceSpan(match.start(2), match.end(2)),
                alias=alias,
                alias_span=alias_span,
            )
        )

    return references


def find_join_conditions(scope_sql: str) -> List[JoinCondition]:
    """Scan a scope for ``alias.column OP alias.column`` comparisons.

    Example:
        >>> [c.text for c in find_join_conditions("ON o.id = c.oid")]
        ['o.id = c.oid']
    """
    return [
        JoinCondition(
            left_alias=match.group(1),
            operator=match.group(2),
            right_alias=match.group(3),
            text=match.group(0),
            start=match.start(),
        )
        for match in JOIN_CONDITION_PATTERN.finditer(scope_sql)
    ]


class ScopeAnalyzer:
    """Adds the nodes and links of one scope to a GraphBuilder.

    Usage:
        analyzer = ScopeAnalyzer(config, warnings)
        analyzer.analyze(body_sql, body_offset, builder, owner="RECENT")
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        warnings: Optional[WarningCollector] = None,
    ) -> None:
        self.config = config or ExtractorConfig()
        self.warnings = warnings or WarningCollector()

    def analyze(
        self,
        scope_sql: str,
        offset: int,
        builder: GraphBuilder,
        owner: Optional[str] = None,
    ) -> None:
        """Analyze one scope.

        Args:
            scope_sql: Masked text of the scope.
            offset: Offset of ``scope_sql`` in the original statement.
            builder: Accumulator shared by every scope of the statement.
            owner: Id of the CTE whose body this is, or None for the main
                query.
        """
        scope_aliases = self._add_table_references(
            scope_sql, offset, builder, owner
        )
        self._add_join_conditions(scope_sql, offset, builder, scope_aliases)

    def _add_table_references(
        self,
        scope_sql: str,
        offset: int,
        builder: GraphBuilder,
        owner: Optional[str],
    ) -> dict[str, str]:
        scope_aliases: dict[str, str] = {}

        for ref in find_table_references(scope_sql, self.config.clause_keywords):
            node_id = ref.node_id
            table_id = ref.table_name.upper()
            is_cte_usage = builder.is_cte(ref.table_name)
            scope_aliases[node_id] = node_id

            if not builder.has_node(node_id):
                # CTE usages are JOIN nodes; CTE is kept for the definition
                if ref.keyword == "FROM" and owner is None and not is_cte_usage:
                    kind = NodeKind.MAIN
                else:
                    kind = NodeKind.JOIN
                builder.add_node(
                    GraphNode(
                        id=node_id,
                        table_name=ref.table_name,
                        alias=ref.display_alias,
                        kind=kind,
                        location=ref.location.shifted(offset),
                    )
                )

            if owner is not None:
                builder.add_link(node_id, owner, LinkKind.CTE_DEF, DEFINES_CONDITION)

            if is_cte_usage and table_id != node_id:
                builder.add_link(
                    table_id, node_id, LinkKind.INSTANCE, USAGE_CONDITION
                )

        return scope_aliases

    def _add_join_conditions(
        self,
        scope_sql: str,
        offset: int,
        builder: GraphBuilder,
        scope_aliases: dict[str, str],
    ) -> None:
        for condition in find_join_conditions(scope_sql):
            left = scope_aliases.get(condition.left_alias.upper())
            right = scope_aliases.get(condition.right_alias.upper())

            if left is None or right is None:
                missing = (
                    condition.left_alias if left is None else condition.right_alias
                )
                self.warnings.add_unresolved_join_alias_info(
                    condition.text, missing, offset + condition.start
                )
                continue
            if builder.has_join_between(left, right):
                continue

            builder.add_link(left, right, LinkKind.JOIN, condition.text)
