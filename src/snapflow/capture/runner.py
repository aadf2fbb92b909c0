"""Running a strategy's capture under a deadline."""

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from snapflow.capture.expectation import Expectation
from snapflow.common.exceptions import SnapflowError, capture_timeout_error, protocol_violation_error
from snapflow.constants import CaptureOutcome
from snapflow.logging import get_logger

if TYPE_CHECKING:
    from snapflow.snapshotting import Snapshotting


logger = get_logger(__name__)

Format = TypeVar("Format")


@dataclass
class CaptureResult(Generic[Format]):
    """Outcome of one capture.

    Attributes:
        outcome: How the wait ended
        value: The artifact, set only when ``outcome`` is COMPLETED
        error: Failure to report, set for every other outcome
        elapsed_seconds: Time spent starting and waiting on the capture
    """

    outcome: CaptureOutcome
    value: Optional[Format] = None
    error: Optional[SnapflowError] = None
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.outcome == CaptureOutcome.COMPLETED


def capture(snapshotting: "Snapshotting[Any, Format]", value: Any, timeout: float) -> CaptureResult[Format]:
    """Materialize ``value`` as an artifact through the strategy's capture.

    The capture may complete inside ``run`` or later from another thread;
    either way the calling thread blocks for at most ``timeout`` seconds.

    Args:
        snapshotting: Strategy providing the capture function
        value: The value to snapshot
        timeout: Maximum seconds to wait for completion

    Returns:
        CaptureResult carrying either the artifact or the error to report
    """
    expectation: Expectation[Format] = Expectation()
    start = time.perf_counter()

    try:
        snapshotting.snapshot(value).run(expectation.fulfill)
    except Exception as exc:
        logger.debug("Capture raised before completing", exc_info=True)
        return CaptureResult(
            outcome=CaptureOutcome.ABORTED,
            error=protocol_violation_error(reason="capture raised", original_error=exc),
            elapsed_seconds=time.perf_counter() - start,
        )

    outcome = expectation.wait(timeout)
    elapsed = time.perf_counter() - start

    if outcome == CaptureOutcome.COMPLETED:
        return CaptureResult(outcome=outcome, value=expectation.value, elapsed_seconds=elapsed)

    if outcome == CaptureOutcome.TIMED_OUT:
        error = capture_timeout_error(timeout)
    elif expectation.fulfillment_count > 1:
        error = protocol_violation_error(reason=f"completion signalled {expectation.fulfillment_count} times")
    else:
        error = protocol_violation_error(reason="capture failed", original_error=expectation.error)

    return CaptureResult(outcome=outcome, error=error, elapsed_seconds=elapsed)
