"""Constants module for SnapFlow.

This module contains all constant values and enumerations used throughout
SnapFlow. It has no dependencies on other SnapFlow modules.
"""

from snapflow.constants.snapshot import (
    DEFAULT_SNAPSHOTS_DIRNAME,
    DEFAULT_TIMEOUT_SECONDS,
    TEST_NAME_PREFIX,
    CaptureOutcome,
    RecordMode,
)

__all__ = [
    "DEFAULT_SNAPSHOTS_DIRNAME",
    "DEFAULT_TIMEOUT_SECONDS",
    "TEST_NAME_PREFIX",
    "CaptureOutcome",
    "RecordMode",
]
