"""
SQL text preparation.

This package contains the comment mask applied before extraction and the
script splitter used to feed multi-statement files one statement at a time.
"""

from query_graph.parser.comment_mask import mask_comments
from query_graph.parser.script_splitter import ScriptSplitter, StatementSpan

__all__ = [
    "mask_comments",
    "ScriptSplitter",
    "StatementSpan",
]
