"""Snapshot lifecycle orchestration."""

from snapflow.orchestration.deferred import Deferred, resolve_value
from snapflow.orchestration.orchestrator import SnapshotOrchestrator

__all__ = [
    "Deferred",
    "SnapshotOrchestrator",
    "resolve_value",
]
