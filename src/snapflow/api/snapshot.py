"""Public entry points for taking and verifying snapshots.

Caller metadata (``file``, ``test_name``, ``line``) defaults to the frame
that called into snapflow, so a plain call from a test function names
its snapshot after the test and attributes failures to the calling line.
Pass them explicitly to override either behavior.
"""

from pathlib import Path
from typing import Any, Optional, Union

from snapflow.constants import RecordMode
from snapflow.orchestration import SnapshotOrchestrator
from snapflow.paths import caller_location
from snapflow.snapshotting import Snapshotting
from snapflow.types.snapshot import SnapshotFailure


class SnapshotAssertionError(AssertionError):
    """Raised by ``assert_snapshot``; carries the reported failure."""

    def __init__(self, failure: SnapshotFailure):
        super().__init__(failure.describe())
        self.failure = failure


def take_snapshot(
    value: Any,
    snapshotting: Snapshotting,
    name: Optional[str] = None,
    snapshot_directory: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = None,
    file: Optional[str] = None,
    test_name: Optional[str] = None,
    line: Optional[int] = None,
    counter: Optional[int] = None,
) -> Optional[SnapshotFailure]:
    """Take a snapshot of ``value`` and save it on disk.

    The artifact is written on every call, replacing any existing
    reference.

    Args:
        value: The value to snapshot. Wrap it in ``Deferred`` to have
            errors raised while building it reported as failures.
        snapshotting: Strategy for serializing and comparing the value
        name: Explicit snapshot name. Defaults to the test name with its
            ``test`` prefix removed.
        snapshot_directory: Directory for the snapshot. Defaults to
            ``__Snapshots__/<test file name>`` next to the test file.
        timeout: Seconds the capture has to complete. Defaults to the
            configured timeout (5 seconds).
        file: Test file the snapshot belongs to
        test_name: Test the snapshot belongs to
        line: Line failures are attributed to
        counter: Sequence suffix for several snapshots in one test

    Returns:
        None on success, otherwise the failure
    """
    location = caller_location(file, test_name, line)
    return SnapshotOrchestrator().take(
        value,
        snapshotting,
        location=location,
        name=name,
        snapshot_directory=snapshot_directory,
        timeout=timeout,
        counter=counter,
    )


def verify_snapshot(
    value: Any,
    snapshotting: Snapshotting,
    name: Optional[str] = None,
    record: Optional[Union[RecordMode, bool, str]] = None,
    snapshot_directory: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = None,
    file: Optional[str] = None,
    test_name: Optional[str] = None,
    line: Optional[int] = None,
) -> Optional[SnapshotFailure]:
    """Verify ``value`` against its reference snapshot.

    Args:
        record: Record mode for this call; defaults to the configured mode
        (other arguments as for ``take_snapshot``)

    Returns:
        None when the snapshot matches, otherwise the failure
    """
    location = caller_location(file, test_name, line)
    return SnapshotOrchestrator().verify(
        value,
        snapshotting,
        location=location,
        name=name,
        record=record,
        snapshot_directory=snapshot_directory,
        timeout=timeout,
    )


def assert_snapshot(
    value: Any,
    snapshotting: Snapshotting,
    name: Optional[str] = None,
    record: Optional[Union[RecordMode, bool, str]] = None,
    snapshot_directory: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = None,
    file: Optional[str] = None,
    test_name: Optional[str] = None,
    line: Optional[int] = None,
) -> None:
    """Assert that ``value`` matches its reference snapshot.

    Raises:
        SnapshotAssertionError: When verification fails
    """
    __tracebackhide__ = True
    failure = verify_snapshot(
        value,
        snapshotting,
        name=name,
        record=record,
        snapshot_directory=snapshot_directory,
        timeout=timeout,
        file=file,
        test_name=test_name,
        line=line,
    )
    if failure is not None:
        raise SnapshotAssertionError(failure)
