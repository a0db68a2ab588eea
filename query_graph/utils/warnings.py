"""
Diagnostics for join graph extraction.

Extraction never fails on malformed SQL; regions that do not match are
skipped. This module collects notes about what was skipped so a caller
(typically the CLI) can show them. Diagnostics never change the graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VALID_LEVELS = ("INFO", "WARNING", "ERROR")


@dataclass
class ExtractionWarning:
    """Warning or error message recorded during extraction.

    Attributes:
        level: Severity level ("INFO", "WARNING", "ERROR").
        message: Message text.
        context: Optional context information (e.g., SQL snippet).
        position: Optional offset into the original SQL.

    Example:
        >>> warning = ExtractionWarning(level="WARNING", message="skipped")
        >>> warning.level
        'WARNING'
    """

    level: str
    message: str
    context: Optional[str] = None
    position: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate warning level."""
        if self.level not in VALID_LEVELS:
            raise ValueError(
                f"Invalid warning level: {self.level}. "
                f"Must be one of {list(VALID_LEVELS)}"
            )

    def to_dict(self) -> dict[str, object]:
        return {
            "level": self.level,
            "message": self.message,
            "context": self.context,
            "position": self.position,
        }


class WarningCollector:
    """Collects warnings and errors during extraction.

    A disabled collector accepts calls and drops them, so extraction code
    does not need to check the configuration before recording.

    Attributes:
        warnings: List of ExtractionWarning objects collected so far.
        enabled: Whether add() records anything.

    Example:
        >>> collector = WarningCollector()
        >>> collector.add("WARNING", "Unbalanced parenthesis")
        >>> collector.has_errors()
        False
        >>> collector.add("ERROR", "Internal failure")
        >>> collector.has_errors()
        True
    """

    def __init__(self, enabled: bool = True) -> None:
        self.warnings: list[ExtractionWarning] = []
        self.enabled = enabled

    def add(
        self,
        level: str,
        message: str,
        context: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        """Add a warning or error message.

        Args:
            level: Severity level ("INFO", "WARNING", "ERROR").
            message: Message text.
            context: Optional context information (e.g., SQL snippet).
            position: Optional offset into the original SQL.
        """
        warning = ExtractionWarning(
            level=level, message=message, context=context, position=position
        )
        if self.enabled:
            self.warnings.append(warning)

    def has_errors(self) -> bool:
        return any(warning.level == "ERROR" for warning in self.warnings)

    def get_all(self) -> list[ExtractionWarning]:
        """Get all collected warnings, in the order they were added."""
        return self.warnings.copy()

    def get_by_level(self, level: str) -> list[ExtractionWarning]:
        return [
            warning for warning in self.warnings if warning.level == level
        ]

    def clear(self) -> None:
        self.warnings.clear()

    def add_unbalanced_cte_warning(self, cte_name: str, position: int) -> None:
        """Record that a CTE body had no closing parenthesis.

        Example:
            >>> collector = WarningCollector()
            >>> collector.add_unbalanced_cte_warning("recent", 15)
            >>> collector.get_all()[0].position
            15
        """
        message = (
            f"CTE '{cte_name}' has no closing parenthesis. "
            f"Analyzing the whole statement as one scope."
        )
        self.add("WARNING", message, position=position)

    def add_unresolved_join_alias_info(
        self, condition: str, alias: str, position: int
    ) -> None:
        """Record a join condition that names an alias unknown to its scope."""
        message = (
            f"Alias '{alias}' in condition '{condition}' is not bound "
            f"in this scope. Condition ignored."
        )
        self.add("INFO", message, context=condition, position=position)

    def add_internal_error(self, error: BaseException) -> None:
        """Record an internal fault that collapsed the result to empty."""
        message = (
            f"Extraction failed internally ({type(error).__name__}: {error}). "
            f"Returning an empty graph."
        )
        self.add("ERROR", message)

    def get_summary(self) -> dict[str, int]:
        """Get a summary of warnings by level.

        Example:
            >>> collector = WarningCollector()
            >>> collector.add("INFO", "Info 1")
            >>> collector.add("WARNING", "Warning 1")
            >>> collector.get_summary() == {"INFO": 1, "WARNING": 1, "ERROR": 0}
            True
        """
        summary: dict[str, int] = {level: 0 for level in VALID_LEVELS}
        for warning in self.warnings:
            summary[warning.level] = summary.get(warning.level, 0) + 1
        return summary
