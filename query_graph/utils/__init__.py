"""
Utility functions and helpers for join graph extraction.

This package contains the diagnostics collector and the highlighting
helpers used by the CLI and host editors.
"""

from query_graph.utils.warnings import ExtractionWarning, WarningCollector
from query_graph.utils.highlight import (
    HighlightSegment,
    highlight_position,
    highlight_segments,
    node_category,
)

__all__ = [
    "ExtractionWarning",
    "HighlightSegment",
    "WarningCollector",
    "highlight_position",
    "highlight_segments",
    "node_category",
]
