"""
Configuration model for join graph extraction.

This module defines the ExtractorConfig class and ErrorMode enum, which
control how the extractor reacts to internal faults and which words are
never treated as table aliases.
"""

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_CLAUSE_KEYWORDS: frozenset[str] = frozenset(
    {
        "ON",
        "WHERE",
        "GROUP",
        "ORDER",
        "HAVING",
        "LEFT",
        "RIGHT",
        "INNER",
        "OUTER",
        "FULL",
        "CROSS",
        "JOIN",
        "UNION",
        "SELECT",
        "WITH",
        "LIMIT",
        "OFFSET",
    }
)


class ErrorMode(str, Enum):
    """Enumeration of error handling modes for graph extraction.

    Attributes:
        FAIL: Raise GraphExtractionError when an internal fault occurs.
        WARN: Return an empty graph and record an ERROR diagnostic.
        IGNORE: Return an empty graph without recording anything.

    Example:
        >>> ErrorMode.values()
        ['fail', 'warn', 'ignore']
    """

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible error mode values."""
        return [member.value for member in cls]


@dataclass
class ExtractorConfig:
    """Configuration settings for join graph extraction.

    The defaults reproduce the behaviour of the public ``extract_graph``
    entry point: internal faults degrade to an empty graph, and the reserved
    keyword set is the ANSI clause keywords that can follow a table name.

    Attributes:
        on_internal_error: What to do when extraction raises internally.
            Defaults to ErrorMode.WARN.
        clause_keywords: Uppercase words that are never read as an alias
            (and never as a table name). Defaults to DEFAULT_CLAUSE_KEYWORDS.
        collect_warnings: If True, skipped regions and fallbacks are
            recorded as diagnostics on the outcome. Defaults to True.

    Example:
        >>> config = ExtractorConfig(on_internal_error=ErrorMode.FAIL)
        >>> "WHERE" in config.clause_keywords
        True
    """

    on_internal_error: ErrorMode = ErrorMode.WARN
    clause_keywords: frozenset[str] = field(
        default_factory=lambda: DEFAULT_CLAUSE_KEYWORDS
    )
    collect_warnings: bool = True

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        if not isinstance(self.on_internal_error, ErrorMode):
            raise TypeError("on_internal_error must be an ErrorMode instance")
        if not isinstance(self.collect_warnings, bool):
            raise TypeError("collect_warnings must be a boolean")
        if not isinstance(self.clause_keywords, (set, frozenset)):
            raise TypeError("clause_keywords must be a set of strings")
        if not self.clause_keywords:
            raise ValueError("clause_keywords cannot be empty")
        # Lookups are done against uppercased words
        self.clause_keywords = frozenset(k.upper() for k in self.clause_keywords)
