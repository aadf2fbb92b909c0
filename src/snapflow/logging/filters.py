"""Logging filters for context injection.

This module provides filters that inject snapshot context variables into
log records, enabling correlation of logs with the test and snapshot that
produced them.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from snapflow.__version__ import __version__

test_name_var: ContextVar[Optional[str]] = ContextVar("test_name", default=None)
snapshot_name_var: ContextVar[Optional[str]] = ContextVar("snapshot_name", default=None)


class ContextFilter(logging.Filter):
    """Logging filter that adds snapshot context variables to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "test_name", test_name_var.get())
        setattr(record, "snapshot_name", snapshot_name_var.get())
        setattr(record, "sdk_name", "snapflow")
        setattr(record, "snapflow_version", __version__)

        return True


def set_snapshot_context(
    test_name: Optional[str] = None,
    snapshot_name: Optional[str] = None,
) -> None:
    """Set snapshot context variables."""
    if test_name is not None:
        test_name_var.set(test_name)
    if snapshot_name is not None:
        snapshot_name_var.set(snapshot_name)


def clear_snapshot_context() -> None:
    """Clear all snapshot context variables."""
    test_name_var.set(None)
    snapshot_name_var.set(None)


@contextmanager
def snapshot_context(
    test_name: Optional[str] = None,
    snapshot_name: Optional[str] = None,
) -> Iterator[None]:
    """Scope snapshot context variables to a block, restoring prior values."""
    test_token = test_name_var.set(test_name)
    snapshot_token = snapshot_name_var.set(snapshot_name)
    try:
        yield
    finally:
        snapshot_name_var.reset(snapshot_token)
        test_name_var.reset(test_token)
