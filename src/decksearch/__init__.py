"""
decksearch public package initialization.

Rewrites search text for study-item collections: canonical normalization,
negation and boolean concatenation.
"""

from .errors import (  # noqa: F401
    SearchConfigurationError,
    SearchError,
    SearchErrorKind,
    SearchInvariantError,
    SearchParseError,
)
from .search import (  # noqa: F401
    SearchRewriter,
    Separator,
    concatenate_searches,
    negate_search,
    normalize_search,
    parse,
)
from .config import SearchSettings  # noqa: F401

__all__ = [
    "SearchConfigurationError",
    "SearchError",
    "SearchErrorKind",
    "SearchInvariantError",
    "SearchParseError",
    "SearchRewriter",
    "SearchSettings",
    "Separator",
    "concatenate_searches",
    "negate_search",
    "normalize_search",
    "parse",
]
