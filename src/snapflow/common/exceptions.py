from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for snapflow operations.

    This enum provides categorized error codes that can be used
    to identify failure kinds without creating numerous exception classes.
    Each category has its own prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors
        CONSTRUCTION_*: Building the value to snapshot failed
        CAPTURE_*: The asynchronous capture did not complete cleanly
        IO_*: Filesystem errors while reading or writing artifacts
        SNAPSHOT_*: Comparison outcomes against the recorded reference
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"

    # Value construction errors
    CONSTRUCTION_ERROR = "CONSTRUCTION_001"

    # Capture errors
    CAPTURE_TIMEOUT = "CAPTURE_001"
    PROTOCOL_VIOLATION = "CAPTURE_002"

    # Filesystem errors
    IO_ERROR = "IO_001"

    # Snapshot comparison outcomes
    SNAPSHOT_MISMATCH = "SNAPSHOT_001"
    MISSING_REFERENCE = "SNAPSHOT_002"
    RECORDED_SNAPSHOT = "SNAPSHOT_003"
    CORRUPT_REFERENCE = "SNAPSHOT_004"


class SnapflowError(Exception):
    """Base exception for all snapflow-related errors.

    The exception uses error codes for categorization instead of a
    separate class per failure kind. The orchestrator converts every
    instance into a reported snapshot failure.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.PROTOCOL_VIOLATION,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        """Initialize snapflow error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from snapflow.logging import get_logger
        logger = get_logger(__name__)
        logger.debug(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "SnapflowError":
        """Create exception from error code.

        Args:
            error_code: Error code
            message: Error message
            **kwargs: Additional arguments for SnapflowError

        Returns:
            SnapflowError instance
        """
        return cls(message=message, error_code=error_code, **kwargs)


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> SnapflowError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        SnapflowError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return SnapflowError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def construction_error(original_error: BaseException, **kwargs) -> SnapflowError:
    """Create an error for a value whose construction raised.

    The message is the underlying error description so that the test
    report reads like the original failure.

    Args:
        original_error: The exception raised while building the value
        **kwargs: Additional error details

    Returns:
        SnapflowError with CONSTRUCTION_ERROR code
    """
    details = kwargs.get('details', {})
    details["error_type"] = type(original_error).__name__

    return SnapflowError(
        message=str(original_error) or type(original_error).__name__,
        error_code=ErrorCode.CONSTRUCTION_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def capture_timeout_error(timeout: float, **kwargs) -> SnapflowError:
    """Create an error for a capture that missed its deadline.

    Args:
        timeout: The timeout in seconds that elapsed
        **kwargs: Additional error details

    Returns:
        SnapflowError with CAPTURE_TIMEOUT code
    """
    details = kwargs.get('details', {})
    details["timeout"] = timeout

    message = (
        f"Exceeded timeout of {timeout} seconds waiting for snapshot.\n"
        "\n"
        "This can happen when an asynchronously rendered value has not finished "
        "loading. Ensure every asynchronous stage of the capture completes to "
        "avoid timeouts, or, if a timeout is unavoidable, consider setting the "
        "\"timeout\" parameter of \"assert_snapshot\" to a higher value."
    )
    return SnapflowError(
        message=message,
        error_code=ErrorCode.CAPTURE_TIMEOUT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def protocol_violation_error(
    reason: Optional[str] = None,
    original_error: Optional[BaseException] = None,
    **kwargs
) -> SnapflowError:
    """Create an error for a capture that completed out of order or not at all.

    Args:
        reason: Optional description of the violation
        original_error: Exception raised by the capture, if any
        **kwargs: Additional error details

    Returns:
        SnapflowError with PROTOCOL_VIOLATION code
    """
    details = kwargs.get('details', {})
    if reason:
        details["reason"] = reason

    message = "Couldn't snapshot value"
    if original_error is not None:
        message = f"{message}: {original_error}"

    return SnapflowError(
        message=message,
        error_code=ErrorCode.PROTOCOL_VIOLATION,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def storage_error(
    original_error: BaseException,
    path: Optional[str] = None,
    operation: Optional[str] = None,
    **kwargs
) -> SnapflowError:
    """Create a filesystem error.

    Args:
        original_error: The underlying OSError
        path: Path being read or written
        operation: Operation that failed (e.g., 'mkdir', 'write')
        **kwargs: Additional error details

    Returns:
        SnapflowError with IO_ERROR code
    """
    details = kwargs.get('details', {})
    if path:
        details["path"] = path
    if operation:
        details["operation"] = operation

    return SnapflowError(
        message=str(original_error),
        error_code=ErrorCode.IO_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def snapshot_mismatch_error(message: str, path: Optional[str] = None, **kwargs) -> SnapflowError:
    """Create an error for a snapshot that differs from its reference.

    Args:
        message: Failure message including the rendered difference
        path: Reference file the snapshot was compared against
        **kwargs: Additional error details

    Returns:
        SnapflowError with SNAPSHOT_MISMATCH code
    """
    details = kwargs.get('details', {})
    if path:
        details["path"] = path

    return SnapflowError(
        message=message,
        error_code=ErrorCode.SNAPSHOT_MISMATCH,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def missing_reference_error(message: str, path: Optional[str] = None, **kwargs) -> SnapflowError:
    """Create an error for a snapshot with no reference on disk.

    Args:
        message: Failure message
        path: Expected reference path
        **kwargs: Additional error details

    Returns:
        SnapflowError with MISSING_REFERENCE code
    """
    details = kwargs.get('details', {})
    if path:
        details["path"] = path

    return SnapflowError(
        message=message,
        error_code=ErrorCode.MISSING_REFERENCE,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def recorded_snapshot_error(path: str, **kwargs) -> SnapflowError:
    """Create the failure reported after recording under record mode.

    Args:
        path: Path the snapshot was recorded to
        **kwargs: Additional error details

    Returns:
        SnapflowError with RECORDED_SNAPSHOT code
    """
    details = kwargs.get('details', {})
    details["path"] = path

    message = (
        "Record mode is on. Automatically recorded snapshot:\n"
        "\n"
        f"open \"{path}\"\n"
        "\n"
        "Turn record mode off and re-run to assert against the newly-recorded snapshot."
    )
    return SnapflowError(
        message=message,
        error_code=ErrorCode.RECORDED_SNAPSHOT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
