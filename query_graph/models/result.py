"""
Extraction outcome model.

This module defines ExtractionOutcome, the internal success/failure variant
produced by GraphExtractor. The public ``extract_graph`` function reduces it
to a plain SqlGraph, which is empty whenever the outcome failed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from query_graph.models.graph import SqlGraph
from query_graph.utils.warnings import ExtractionWarning


class AnalysisStatus(str, Enum):
    """Lifecycle status of an analysis as shown by a host UI."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass
class ExtractionOutcome:
    """Result of one extraction, successful or not.

    Attributes:
        graph: Extracted graph. Always empty when ``success`` is False.
        sql: SQL text that was analyzed.
        success: Whether extraction ran to completion.
        warnings: Diagnostics recorded during extraction.
        error: Error message when ``success`` is False.

    Example:
        >>> outcome = GraphExtractor().extract_with_diagnostics("SELECT 1")
        >>> outcome.status
        <AnalysisStatus.SUCCESS: 'SUCCESS'>
    """

    graph: SqlGraph
    sql: str
    success: bool
    warnings: list[ExtractionWarning] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(
        cls, graph: SqlGraph, sql: str, warnings: list[ExtractionWarning]
    ) -> ExtractionOutcome:
        return cls(graph=graph, sql=sql, success=True, warnings=warnings)

    @classmethod
    def failed(
        cls, sql: str, error: str, warnings: list[ExtractionWarning]
    ) -> ExtractionOutcome:
        return cls(
            graph=SqlGraph.empty(),
            sql=sql,
            success=False,
            warnings=warnings,
            error=error,
        )

    @property
    def status(self) -> AnalysisStatus:
        return AnalysisStatus.SUCCESS if self.success else AnalysisStatus.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Convert the outcome (graph plus diagnostics) to a dictionary."""
        data: dict[str, Any] = self.graph.to_dict()
        data["status"] = self.status.value
        data["warnings"] = [w.to_dict() for w in self.warnings]
        data["error"] = self.error
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
