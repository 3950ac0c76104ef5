"""Structured logging helpers for decksearch."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger("decksearch")
    if logger.handlers:
        logger.setLevel(level)
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger("decksearch")
    if not logger.handlers:
        configure_logging()
    return logging.getLogger(f"decksearch.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or str(uuid.uuid4())
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


def _preview(search: str | None, limit: int = 200) -> str | None:
    if search is None or len(search) <= limit:
        return search
    return f"{search[:limit]}..."


@contextmanager
def time_call(
    name: str, logger: logging.Logger, *, search: str | None = None, threshold_ms: int = 100
) -> Iterator[None]:
    """
    Log how long the wrapped rewrite took and whether it raised.

    Calls at or above ``threshold_ms`` are logged as warnings; the search
    text travels in ``extra`` trimmed to a short preview.
    """

    start = time.monotonic()
    outcome = "ok"
    try:
        yield
    except Exception:
        outcome = "error"
        raise
    finally:
        elapsed_ms = (time.monotonic() - start) * 1000
        level = logging.WARNING if elapsed_ms >= threshold_ms else logging.DEBUG
        extra = {"search": _preview(search), "elapsed_ms": elapsed_ms, "outcome": outcome}
        logger.log(level, "%s took %.2fms (%s)", name, elapsed_ms, outcome, extra=extra)
