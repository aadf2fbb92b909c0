"""Snapshot path resolution."""

from snapflow.paths.location import caller_location
from snapflow.paths.resolver import (
    SnapshotCounter,
    SnapshotIdentity,
    default_snapshot_name,
    resolve_snapshot_path,
    sanitize_path_component,
)

__all__ = [
    "SnapshotCounter",
    "SnapshotIdentity",
    "caller_location",
    "default_snapshot_name",
    "resolve_snapshot_path",
    "sanitize_path_component",
]
