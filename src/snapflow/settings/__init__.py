"""Settings module providing configuration management for SnapFlow.

Configuration is built on Pydantic Settings and read from environment
variables prefixed with ``SNAPSHOT_TESTING_`` (or a ``.env`` file).

Configuration Sources (precedence order):
    1. ``with_snapshot_testing`` overrides for the current context
    2. Environment variables
    3. Default values in code

Quick Start:
    >>> from snapflow.settings import get_settings
    >>> settings = get_settings()
    >>> settings.record
    <RecordMode.MISSING: 'missing'>
"""

from .main import (
    _Settings,
    _reload_settings,
    coerce_record_mode,
    current_diff_tool,
    current_record_mode,
    get_settings,
    with_snapshot_testing,
)
from .base import SnapflowBaseSettings

__all__ = [
    "get_settings",
    "with_snapshot_testing",
    "current_record_mode",
    "current_diff_tool",
    "coerce_record_mode",
    "SnapflowBaseSettings",
]
