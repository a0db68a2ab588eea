"""
Script splitter for SQL files.

This module defines the ScriptSplitter class, which cuts a SQL script into
statements at top-level semicolons while keeping each statement's offset in
the script, so graphs extracted per statement can be shifted back to
script-absolute positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from sqlglot.errors import TokenError
from sqlglot.tokens import Tokenizer, TokenType


@dataclass(frozen=True)
class StatementSpan:
    """One statement of a script.

    Attributes:
        index: Zero-based position of the statement in the script.
        start: Offset of the first character of ``text`` in the script.
        end: Offset one past the last character of ``text``.
        text: Statement text, exactly ``script[start:end]``.
    """

    index: int
    start: int
    end: int
    text: str


class ScriptSplitter:
    """SQL script splitter.

    Responsibilities:
    1. Find statement-terminating semicolons with sqlglot's tokenizer, so
       semicolons inside string literals and comments are not split points
    2. Preserve the original text and offsets of each statement

    Usage:
        splitter = ScriptSplitter()
        spans = splitter.split("SELECT 1 FROM a; SELECT 2 FROM b;")
        # Returns two StatementSpan objects
    """

    def split(self, script: str) -> List[StatementSpan]:
        """Split a script into statements.

        Whitespace-only pieces are dropped. If the tokenizer rejects the
        script (for example an unterminated string literal), the whole
        script is returned as a single statement.

        Args:
            script: SQL script text.

        Returns:
            List of StatementSpan objects in script order.
        """
        if not script.strip():
            return []

        try:
            boundaries = self._semicolon_offsets(script)
        except TokenError:
            return [StatementSpan(index=0, start=0, end=len(script), text=script)]

        spans: List[StatementSpan] = []
        start = 0
        for boundary in boundaries + [len(script)]:
            piece = script[start:boundary]
            if piece.strip():
                spans.append(
                    StatementSpan(
                        index=len(spans), start=start, end=boundary, text=piece
                    )
                )
            start = boundary + 1
        return spans

    def _semicolon_offsets(self, script: str) -> List[int]:
        tokenizer = Tokenizer()
        return [
            token.start
            for token in tokenizer.tokenize(script)
            if token.token_type == TokenType.SEMICOLON
        ]
