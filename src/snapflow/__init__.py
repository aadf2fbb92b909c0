from snapflow.__version__ import __version__

from snapflow.api import (
    SnapshotAssertionError,
    assert_snapshot,
    take_snapshot,
    verify_snapshot,
)
from snapflow.capture import Async, CaptureResult, Expectation, Failure, capture
from snapflow.common.exceptions import ErrorCode, SnapflowError
from snapflow.constants import CaptureOutcome, RecordMode
from snapflow.diffing import Diffing
from snapflow.orchestration import Deferred, SnapshotOrchestrator
from snapflow.paths import SnapshotIdentity, default_snapshot_name, sanitize_path_component
from snapflow.settings import get_settings, with_snapshot_testing
from snapflow.snapshotting import Snapshotting, strategies
from snapflow.types import Attachment, SnapshotFailure, SourceLocation


__all__ = [
    "__version__",

    # Entry points
    "take_snapshot",
    "verify_snapshot",
    "assert_snapshot",
    "SnapshotAssertionError",
    "SnapshotOrchestrator",
    "Deferred",

    # Strategies and diffing
    "Snapshotting",
    "Diffing",
    "strategies",
    "Attachment",

    # Capture protocol
    "Async",
    "Failure",
    "Expectation",
    "CaptureResult",
    "CaptureOutcome",
    "capture",

    # Paths
    "SnapshotIdentity",
    "SourceLocation",
    "sanitize_path_component",
    "default_snapshot_name",

    # Configuration
    "RecordMode",
    "get_settings",
    "with_snapshot_testing",

    # Exceptions
    "SnapflowError",
    "ErrorCode",
    "SnapshotFailure",
]
