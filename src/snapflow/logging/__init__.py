"""Logging infrastructure for SnapFlow.

This module provides structured logging with JSON output and snapshot
context tracking, correlated with the active OpenTelemetry span.
"""

from snapflow.logging.filters import ContextFilter, clear_snapshot_context, set_snapshot_context, snapshot_context
from snapflow.logging.logger import LOGGER_NAME, CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "LOGGER_NAME",
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "set_snapshot_context",
    "clear_snapshot_context",
    "snapshot_context",
]
