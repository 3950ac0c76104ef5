"""
Utility helpers shared across decksearch packages.
"""

from .logging import configure_logging, get_correlation_id, get_logger, set_correlation_id, time_call

__all__ = ["configure_logging", "get_correlation_id", "get_logger", "set_correlation_id", "time_call"]
