"""Public snapshot API."""

from snapflow.api.snapshot import SnapshotAssertionError, assert_snapshot, take_snapshot, verify_snapshot

__all__ = [
    "SnapshotAssertionError",
    "assert_snapshot",
    "take_snapshot",
    "verify_snapshot",
]
