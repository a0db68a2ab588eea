"""
Custom exception classes for join graph extraction.

This module defines the exceptions used inside the query_graph package.
Extraction itself is best-effort: the public entry point never lets these
escape unless the caller explicitly asked for strict behaviour through
ExtractorConfig.
"""

from typing import Optional


class QueryGraphError(Exception):
    """Base exception class for all join graph errors.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a QueryGraphError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class GraphExtractionError(QueryGraphError):
    """Exception raised when extraction hits an internal fault.

    Only surfaced when the extractor runs with
    ``on_internal_error=ErrorMode.FAIL``. In every other mode the fault is
    converted into an empty graph.

    Attributes:
        message: Error message describing the fault.
        sql: Optional SQL text that was being analyzed.
    """

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize a GraphExtractionError.

        Args:
            message: Error message describing the fault.
            sql: Optional SQL text that was being analyzed.
        """
        self.sql = sql
        super().__init__(message)


class UnbalancedParenthesisError(QueryGraphError):
    """Raised when a CTE body has no matching closing parenthesis.

    The extractor catches this and falls back to analyzing the whole input
    as a single top-level scope.

    Attributes:
        message: Error message.
        cte_name: Name of the CTE whose body could not be delimited.
        position: Offset of the opening parenthesis.
    """

    def __init__(self, cte_name: str, position: int) -> None:
        """Initialize an UnbalancedParenthesisError.

        Args:
            cte_name: Name of the CTE whose body could not be delimited.
            position: Offset of the opening parenthesis.
        """
        self.cte_name = cte_name
        self.position = position
        super().__init__(
            f"No closing parenthesis for CTE '{cte_name}' "
            f"(opened at offset {position})"
        )
