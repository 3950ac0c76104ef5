"""
Runtime settings for decksearch, optionally loaded from the environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import SearchConfigurationError
from .search.rewrite import Separator
from .utils.logging import configure_logging


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise SearchConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


def _parse_level(value: str, *, key: str) -> int:
    normalized = value.strip()
    if normalized.lstrip("-").isdigit():
        return int(normalized)
    level = logging.getLevelName(normalized.upper())
    if not isinstance(level, int):
        raise SearchConfigurationError(f"Invalid log level for '{key}': {value!r}")
    return level


def _parse_separator(value: str, *, key: str) -> Separator:
    normalized = value.strip().lower()
    if normalized in {"and", "0"}:
        return Separator.AND
    if normalized in {"or", "1"}:
        return Separator.OR
    raise SearchConfigurationError(f"Invalid separator for '{key}': {value!r}")


@dataclass(frozen=True)
class SearchSettings:
    """
    Settings shared by the search rewriting entry points.
    """

    log_level: int = logging.INFO
    slow_call_ms: int = 100
    default_separator: Separator = Separator.AND

    @classmethod
    def from_env(cls, prefix: str = "DECKSEARCH_", environ: Mapping[str, str] | None = None) -> "SearchSettings":
        """
        Build settings from ``<prefix>LOG_LEVEL``, ``<prefix>SLOW_CALL_MS``
        and ``<prefix>DEFAULT_SEPARATOR``; unset variables keep defaults.
        """

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        key = f"{prefix}LOG_LEVEL"
        if env.get(key):
            values["log_level"] = _parse_level(env[key], key=key)

        key = f"{prefix}SLOW_CALL_MS"
        if env.get(key):
            slow_call_ms = _parse_int(env[key], key=key)
            if slow_call_ms < 0:
                raise SearchConfigurationError(f"'{key}' must not be negative")
            values["slow_call_ms"] = slow_call_ms

        key = f"{prefix}DEFAULT_SEPARATOR"
        if env.get(key):
            values["default_separator"] = _parse_separator(env[key], key=key)

        return cls(**values)

    def configure_logging(self) -> None:
        configure_logging(self.log_level)
