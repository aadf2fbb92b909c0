"""Monitoring infrastructure for snapshot metrics."""

from snapflow.monitoring.metrics import SnapshotMetrics, get_metrics

__all__ = [
    "SnapshotMetrics",
    "get_metrics",
]
