"""
Graph node model.

This module defines the GraphNode class, which represents one distinct
relation referenced by a query (a table, a CTE definition, or an aliased
usage of either), together with the span of text that names it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class NodeKind(str, Enum):
    """Kind of a relation node.

    Attributes:
        MAIN: Target of a FROM clause in the top-level query.
        JOIN: Any other referenced relation, including usages of a CTE.
        CTE: A common-table-expression definition.
        SUBQUERY: Reserved for derived tables. The extractor does not
            produce it; renderers still map it to its own category.
    """

    MAIN = "MAIN"
    JOIN = "JOIN"
    CTE = "CTE"
    SUBQUERY = "SUBQUERY"


@dataclass(frozen=True)
class SourceSpan:
    """Half-open character range ``[start, end)`` in the original SQL text.

    Example:
        >>> span = SourceSpan(14, 20)
        >>> span.slice("SELECT * FROM orders o")
        'orders'
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span bounds."""
        if self.start < 0:
            raise ValueError("span start cannot be negative")
        if self.end < self.start:
            raise ValueError("span end cannot precede its start")

    def __len__(self) -> int:
        return self.end - self.start

    def shifted(self, offset: int) -> SourceSpan:
        """Return the same span moved right by ``offset`` characters."""
        return SourceSpan(self.start + offset, self.end + offset)

    def slice(self, text: str) -> str:
        """Return the part of ``text`` covered by this span."""
        return text[self.start : self.end]

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class GraphNode:
    """One referenceable relation in the query.

    Nodes are keyed by ``id``, the uppercased alias (or table name when no
    alias was written). Once a node is in a graph it is never replaced:
    the first reference to an id decides every field.

    Attributes:
        id: Case-insensitive identifier, unique in the graph.
        table_name: Table or CTE name in its original case, possibly
            schema-qualified ("sales.orders").
        alias: Alias in its original case, or ``table_name`` when none.
        kind: NodeKind of the node.
        location: Span of the identifier chosen to represent the node
            (alias preferred over table name), or None.

    Example:
        >>> node = GraphNode(
        ...     id="O", table_name="orders", alias="o", kind=NodeKind.MAIN,
        ...     location=SourceSpan(14, 15),
        ... )
        >>> node.has_alias
        True
    """

    id: str
    table_name: str
    alias: str
    kind: NodeKind
    location: Optional[SourceSpan] = None

    def __post_init__(self) -> None:
        """Validate that required fields are not empty."""
        if not self.id:
            raise ValueError("node id cannot be empty")
        if not self.table_name:
            raise ValueError("table name cannot be empty")

    @property
    def has_alias(self) -> bool:
        """Whether the alias differs from the table name."""
        return self.alias != self.table_name

    def shifted(self, offset: int) -> GraphNode:
        """Return a copy whose location is moved right by ``offset``."""
        if self.location is None or offset == 0:
            return self
        return GraphNode(
            id=self.id,
            table_name=self.table_name,
            alias=self.alias,
            kind=self.kind,
            location=self.location.shifted(offset),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire shape consumed by highlight and graph views."""
        return {
            "id": self.id,
            "tableName": self.table_name,
            "alias": self.alias,
            "type": self.kind.value,
            "location": self.location.to_dict() if self.location else None,
        }
