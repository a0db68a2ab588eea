"""
Graph link model.

This module defines the GraphLink class, a directed relationship between two
node ids, and the LinkKind enum.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFINES_CONDITION = "defines"
USAGE_CONDITION = "usage"


class LinkKind(str, Enum):
    """Kind of a link between two nodes.

    Attributes:
        CTE_DEF: A relation used inside a CTE body, pointing at the CTE.
        INSTANCE: A CTE pointing at an aliased usage of itself.
        JOIN: An equality (or inequality) condition between two aliases of
            the same scope.
    """

    CTE_DEF = "CTE_DEF"
    INSTANCE = "INSTANCE"
    JOIN = "JOIN"

    @property
    def is_structural(self) -> bool:
        """CTE_DEF and INSTANCE describe structure rather than a join."""
        return self is not LinkKind.JOIN


@dataclass(frozen=True)
class GraphLink:
    """Directed relationship between two node ids.

    Attributes:
        source: Id of the source node.
        target: Id of the target node.
        kind: LinkKind of the relationship.
        condition: "defines" for CTE_DEF, "usage" for INSTANCE, or the
            matched comparison text for JOIN.

    Example:
        >>> link = GraphLink("O", "C", LinkKind.JOIN, "o.customer_id = c.id")
        >>> link.connects("C", "O")
        True
    """

    source: str
    target: str
    kind: LinkKind
    condition: str

    def connects(self, a: str, b: str) -> bool:
        """Whether this link joins ``a`` and ``b`` in either direction."""
        return {self.source, self.target} == {a, b}

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire shape consumed by the graph view."""
        return {
            "source": self.source,
            "target": self.target,
            "joinType": self.kind.value,
            "condition": self.condition,
        }
