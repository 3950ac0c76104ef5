"""
Error hierarchy for decksearch.
"""

from __future__ import annotations

import enum


class SearchError(Exception):
    """Base error for search-related failures."""


class SearchErrorKind(enum.Enum):
    MISPLACED_OPERATOR = "misplaced operator"
    UNBALANCED_PARENTHESES = "unbalanced parentheses"
    EMPTY_GROUP = "empty group"
    UNTERMINATED_QUOTE = "unterminated quote"
    DANGLING_ESCAPE = "dangling escape"
    INVALID_NUMBER = "invalid number"
    INVALID_RATED = "invalid rated search"
    INVALID_FLAG = "invalid flag"
    INVALID_IDS = "invalid id list"
    INVALID_STATE = "invalid state"
    INVALID_PROPERTY = "invalid property"
    INVALID_DUPLICATES = "invalid duplicates search"


class SearchParseError(SearchError):
    """
    Raised when search text cannot be parsed into an expression tree.
    """

    def __init__(self, kind: SearchErrorKind, text: str, detail: str | None = None) -> None:
        self.kind = kind
        self.text = text
        self.detail = detail
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)


class SearchInvariantError(SearchError):
    """Raised when a tree violates the structure the parser guarantees."""


class SearchConfigurationError(SearchError):
    """Raised when settings contain invalid values."""
