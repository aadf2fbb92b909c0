from enum import Enum


DEFAULT_SNAPSHOTS_DIRNAME = "__Snapshots__"
DEFAULT_TIMEOUT_SECONDS = 5.0
TEST_NAME_PREFIX = "test"


class RecordMode(str, Enum):
    """When reference snapshots are written to disk.

    Values:
        ALL: Record every snapshot, overwriting references, and report
            each recording as a failure so it is reviewed.
        MISSING: Compare against references; record the snapshot only
            when no reference exists yet.
        NEVER: Compare only. A missing reference is a failure and
            nothing is written.
        FAILED: Compare against references; overwrite the reference when
            the comparison fails (the test still fails).
    """
    ALL = "all"
    MISSING = "missing"
    NEVER = "never"
    FAILED = "failed"


class CaptureOutcome(str, Enum):
    """Terminal outcome of waiting on an asynchronous capture.

    Values:
        COMPLETED: The capture delivered an artifact.
        TIMED_OUT: No completion arrived before the deadline.
        ABORTED: Completion was signalled more than once, out of order,
            or the capture raised before completing.
    """
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    ABORTED = "aborted"
