"""
Comment masking for SQL text.

Comments are blanked out rather than removed so that every offset computed on
the masked text is also valid against the original text.
"""

import re

# Unterminated block comments run to end of input
BLOCK_COMMENT_PATTERN = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
LINE_COMMENT_PATTERN = re.compile(r"--[^\n]*")


def _blank(match: "re.Match[str]") -> str:
    return " " * len(match.group(0))


def mask_comments(sql: str) -> str:
    """Replace every comment character with a space.

    Block comments (``/* ... */``, non-greedy, may span lines) are masked
    first, then line comments (``--`` to end of line). The result has the
    same length as the input and differs from it only inside comments.

    Args:
        sql: Raw SQL text.

    Returns:
        Masked SQL text of identical length.

    Example:
        >>> mask_comments("SELECT 1 -- note")
        'SELECT 1        '
    """
    masked = BLOCK_COMMENT_PATTERN.sub(_blank, sql)
    return LINE_COMMENT_PATTERN.sub(_blank, masked)
