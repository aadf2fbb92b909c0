"""Shared model types for SnapFlow."""

from snapflow.types.base import SnapflowBaseModel
from snapflow.types.snapshot import Attachment, SnapshotFailure, SourceLocation

__all__ = [
    "SnapflowBaseModel",
    "Attachment",
    "SnapshotFailure",
    "SourceLocation",
]
