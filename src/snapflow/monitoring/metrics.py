"""Metrics collection for snapshot operations.

Outcomes and capture durations are exported through the OpenTelemetry
metrics API. Without a configured SDK the instruments are no-ops.
"""

from typing import Dict, Optional

from snapflow.__version__ import __version__
from snapflow.logging import get_logger
from snapflow.telemetry import get_meter


class SnapshotMetrics:
    """Collector for snapshot outcomes and capture timings.

    Attributes:
        meter: OpenTelemetry meter
        snapshot_counter: Snapshots processed, tagged by operation and status
        failure_counter: Failures, tagged by error code
        capture_duration_histogram: Seconds spent waiting on captures
    """

    def __init__(self, meter_name: str = "snapflow"):
        self.logger = get_logger(__name__)
        self.meter = get_meter(meter_name, __version__)
        self._setup_instruments()

    def _setup_instruments(self) -> None:
        """Setup OpenTelemetry instruments."""
        self.snapshot_counter = self.meter.create_counter(
            "snapshots_total",
            description="Total number of snapshot operations",
            unit="snapshots"
        )

        self.failure_counter = self.meter.create_counter(
            "snapshot_failures_total",
            description="Total number of reported snapshot failures",
            unit="failures"
        )

        self.capture_duration_histogram = self.meter.create_histogram(
            "snapshot_capture_duration_seconds",
            description="Time spent capturing snapshot artifacts",
            unit="seconds"
        )

    def record_outcome(
        self,
        operation: str,
        status: str,
        error_code: Optional[str] = None,
    ) -> None:
        """Record the outcome of one snapshot operation.

        Args:
            operation: 'take' or 'verify'
            status: 'passed', 'recorded' or 'failed'
            error_code: Error code value for failures
        """
        attributes: Dict[str, str] = {"operation": operation, "status": status}
        self.snapshot_counter.add(1, attributes)
        if error_code:
            self.failure_counter.add(1, {"operation": operation, "error_code": error_code})

    def record_capture(self, operation: str, outcome: str, elapsed_seconds: float) -> None:
        """Record how long a capture took and how it ended."""
        self.capture_duration_histogram.record(
            elapsed_seconds,
            {"operation": operation, "outcome": outcome},
        )


_metrics: Optional[SnapshotMetrics] = None


def get_metrics() -> SnapshotMetrics:
    """Shared metrics collector, created on first use."""
    global _metrics
    if _metrics is None:
        _metrics = SnapshotMetrics()
    return _metrics
