"""Common exceptions for SnapFlow.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions inherit from
    SnapflowError and include structured error information. The
    orchestrator catches them at its boundary and reports them as a
    single snapshot failure.
"""

from snapflow.common.exceptions import (
    SnapflowError,
    ErrorCode,
    # Helper functions
    configuration_error,
    construction_error,
    capture_timeout_error,
    protocol_violation_error,
    storage_error,
    snapshot_mismatch_error,
    missing_reference_error,
    recorded_snapshot_error,
)

__all__ = [
    # Base Exception and Error Codes
    "SnapflowError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "construction_error",
    "capture_timeout_error",
    "protocol_violation_error",
    "storage_error",
    "snapshot_mismatch_error",
    "missing_reference_error",
    "recorded_snapshot_error",
]
