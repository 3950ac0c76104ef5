"""
Search rewriting facade wiring settings, logging and timing together.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from ..config import SearchSettings
from ..errors import SearchParseError
from ..utils import get_logger, time_call
from .parser import Parser, parse
from .rewrite import concatenate_searches, negate_search, normalize_search

T = TypeVar("T")


class SearchRewriter:
    """
    Entry point used by higher layers (query execution, search bar).

    Holds no per-call state and may be shared between threads.
    """

    def __init__(self, settings: SearchSettings | None = None, parser: Parser = parse) -> None:
        self.settings = settings or SearchSettings()
        self.parser = parser
        self.logger = get_logger("search.rewriter")

    def normalize(self, text: str) -> str:
        return self._run("normalize", text, lambda: normalize_search(text, parser=self.parser))

    def negate(self, text: str) -> str:
        return self._run("negate", text, lambda: negate_search(text, parser=self.parser))

    def concatenate(self, texts: Sequence[str], separator: object = None) -> str:
        if separator is None:
            separator = self.settings.default_separator
        texts = list(texts)
        label = " | ".join(texts)
        return self._run(
            "concatenate",
            label,
            lambda: concatenate_searches(separator, texts, parser=self.parser),
        )

    # Internal helpers -------------------------------------------------
    def _run(self, name: str, search: str, call: Callable[[], T]) -> T:
        with time_call(name, self.logger, search=search, threshold_ms=self.settings.slow_call_ms):
            try:
                return call()
            except SearchParseError as exc:
                self.logger.debug(
                    "%s failed to parse %r: %s", name, exc.text, exc, extra={"search": search}
                )
                raise
