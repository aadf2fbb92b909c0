"""Snapshot lifecycle orchestration.

The orchestrator is the boundary where every failure is converted into a
``SnapshotFailure``. For each call it resolves the reference path, makes
sure the directory exists, captures the artifact under a deadline, and
then either persists it (``take``) or compares it with the reference on
disk according to the record mode (``verify``).

Lifecycle of ``take``::

    START -> ensure directory -> CAPTURING
    CAPTURING --success--> HAVE_ARTIFACT -> to_data -> PERSISTED -> DONE
    CAPTURING --timeout--> FAILED
    CAPTURING --construction raised--> FAILED

Exactly one of "artifact written" and "failure reported" happens per call.
"""

import shlex
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from pydantic import ValidationError

from snapflow.capture import capture
from snapflow.common.exceptions import (
    ErrorCode,
    SnapflowError,
    configuration_error,
    construction_error,
    missing_reference_error,
    protocol_violation_error,
    recorded_snapshot_error,
    snapshot_mismatch_error,
    storage_error,
)
from snapflow.constants import RecordMode
from snapflow.logging import get_logger, snapshot_context
from snapflow.monitoring import SnapshotMetrics, get_metrics
from snapflow.orchestration.deferred import resolve_value
from snapflow.paths import SnapshotCounter, SnapshotIdentity
from snapflow.settings import coerce_record_mode, current_diff_tool, current_record_mode, get_settings
from snapflow.settings.main import _Settings
from snapflow.snapshotting import Snapshotting
from snapflow.types.snapshot import Attachment, SnapshotFailure, SourceLocation
from snapflow.utils import traced


logger = get_logger(__name__)

_shared_counter = SnapshotCounter()


def _span_attributes(self: "SnapshotOrchestrator", value: Any, snapshotting: Snapshotting, **kwargs: Any):
    location = kwargs.get("location")
    return {
        "snapflow.path_extension": snapshotting.path_extension,
        "snapflow.test_name": location.test_name if location is not None else None,
        "snapflow.name": kwargs.get("name"),
    }


class SnapshotOrchestrator:
    """Runs the snapshot lifecycle for individual assertions.

    Attributes:
        settings: Snapshot settings (record mode, timeout, directories)
        metrics: Outcome and timing collector
        counter: Numbers unnamed snapshots within a test
    """

    def __init__(
        self,
        settings: Optional[_Settings] = None,
        metrics: Optional[SnapshotMetrics] = None,
        counter: Optional[SnapshotCounter] = None,
    ):
        self.settings = settings if settings is not None else get_settings()
        self.metrics = metrics if metrics is not None else get_metrics()
        self.counter = counter if counter is not None else _shared_counter

    @traced("snapflow.take", attribute_getter=_span_attributes)
    def take(
        self,
        value: Any,
        snapshotting: Snapshotting,
        *,
        location: SourceLocation,
        name: Optional[str] = None,
        snapshot_directory: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
        counter: Optional[int] = None,
    ) -> Optional[SnapshotFailure]:
        """Capture ``value`` and always write it as the reference.

        No comparison is made against an existing reference.

        Returns:
            None once the artifact is written, otherwise the failure
        """
        try:
            identity = self._identity(location, snapshotting, name, snapshot_directory, counter)
        except SnapflowError as error:
            return self._failure("take", error, location, None)

        with snapshot_context(test_name=location.test_name, snapshot_name=identity.snapshot_name):
            try:
                self._ensure_directory(identity.directory)
                artifact = self._capture("take", value, snapshotting, timeout)
                self._write(identity.path, self._serialize(snapshotting, artifact))
            except SnapflowError as error:
                return self._failure("take", error, location, identity.path)

            logger.info("Snapshot written", extra={"path": str(identity.path)})
            self.metrics.record_outcome("take", "recorded")
            return None

    @traced("snapflow.verify", attribute_getter=_span_attributes)
    def verify(
        self,
        value: Any,
        snapshotting: Snapshotting,
        *,
        location: SourceLocation,
        name: Optional[str] = None,
        record: Optional[Union[RecordMode, bool, str]] = None,
        snapshot_directory: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
    ) -> Optional[SnapshotFailure]:
        """Capture ``value`` and compare it with the reference on disk.

        Unnamed snapshots are numbered per test (``RendersHeader.1``,
        ``RendersHeader.2``) so several of them can live in one test.

        Returns:
            None when the snapshot matches, otherwise the failure
        """
        try:
            record_mode = self._record_mode(record)
            counter = None
            if name is None:
                counter = self.counter.next(Path(location.file), location.test_name)
            identity = self._identity(location, snapshotting, name, snapshot_directory, counter)
        except SnapflowError as error:
            return self._failure("verify", error, location, None)

        with snapshot_context(test_name=location.test_name, snapshot_name=identity.snapshot_name):
            try:
                self._ensure_directory(identity.directory)
                artifact = self._capture("verify", value, snapshotting, timeout)
                mismatch = self._compare(identity, snapshotting, artifact, record_mode)
            except SnapflowError as error:
                return self._failure("verify", error, location, identity.path)

            if mismatch is not None:
                error, attachments = mismatch
                return self._failure("verify", error, location, identity.path, attachments)

            self.metrics.record_outcome("verify", "passed")
            return None

    def _identity(
        self,
        location: SourceLocation,
        snapshotting: Snapshotting,
        name: Optional[str],
        snapshot_directory: Optional[Union[str, Path]],
        counter: Optional[int],
    ) -> SnapshotIdentity:
        try:
            return SnapshotIdentity(
                source_file=Path(location.file),
                test_name=location.test_name,
                name=name,
                snapshot_directory=Path(snapshot_directory) if snapshot_directory is not None else None,
                counter=counter,
                path_extension=snapshotting.path_extension,
                snapshots_dirname=self.settings.snapshots_dirname,
                strip_name_separator=self.settings.strip_name_separator,
            )
        except ValidationError as exc:
            raise configuration_error(f"Invalid snapshot arguments: {exc}", cause=exc) from exc

    def _record_mode(self, record: Optional[Union[RecordMode, bool, str]]) -> RecordMode:
        if record is None:
            return current_record_mode(self.settings)
        try:
            return coerce_record_mode(record)
        except ValueError as exc:
            raise configuration_error(str(exc), config_key="record", cause=exc) from exc

    def _capture(self, operation: str, value: Any, snapshotting: Snapshotting, timeout: Optional[float]) -> Any:
        try:
            resolved = resolve_value(value)
        except Exception as exc:
            raise construction_error(exc) from exc

        deadline = timeout if timeout is not None else self.settings.timeout
        result = capture(snapshotting, resolved, deadline)
        self.metrics.record_capture(operation, result.outcome.value, result.elapsed_seconds)

        if not result.succeeded:
            raise result.error
        return result.value

    def _compare(
        self,
        identity: SnapshotIdentity,
        snapshotting: Snapshotting,
        artifact: Any,
        record_mode: RecordMode,
    ) -> Optional[Tuple[SnapflowError, List[Attachment]]]:
        """Compare with the reference, recording it as the mode requires.

        Returns:
            None on a match, or the mismatch error with the diff attachments

        Raises:
            SnapflowError: When recording happened or the reference is unusable
        """
        path = identity.path
        data = self._serialize(snapshotting, artifact)

        if record_mode == RecordMode.ALL:
            self._write(path, data)
            raise recorded_snapshot_error(str(path))

        if not path.exists():
            if record_mode == RecordMode.NEVER:
                raise missing_reference_error(
                    f"No reference was found on disk. New snapshot was not recorded because "
                    f"record mode is \"{record_mode.value}\".\n\nExpected reference at:\n\n\"{path}\"",
                    path=str(path),
                )
            self._write(path, data)
            raise missing_reference_error(
                "No reference was found on disk. Automatically recorded snapshot:\n"
                "\n"
                f"open \"{path}\"\n"
                "\n"
                f"Re-run \"{identity.test_name}\" to assert against the newly-recorded snapshot.",
                path=str(path),
            )

        reference_data = self._read(path)
        if reference_data == data:
            return None

        try:
            reference = snapshotting.diffing.from_data(reference_data)
        except Exception as exc:
            raise SnapflowError(
                f"Couldn't decode reference snapshot at \"{path}\": {exc}",
                error_code=ErrorCode.CORRUPT_REFERENCE,
                details={"path": str(path)},
                cause=exc,
            ) from exc

        try:
            difference = snapshotting.diffing.diff(reference, artifact)
        except Exception as exc:
            raise protocol_violation_error(reason="diff raised", original_error=exc) from exc

        if difference is None:
            return None

        message, attachments = difference
        failed_path = self._write_failed_artifact(identity, data)

        if record_mode == RecordMode.FAILED:
            self._write(path, data)
            message = f"{message}\n\nA new reference was automatically recorded."

        error = snapshot_mismatch_error(
            f"Snapshot \"{identity.snapshot_name}\" does not match reference.\n"
            "\n"
            f"{self._diff_command(path, failed_path)}\n"
            "\n"
            f"{message}",
            path=str(path),
        )
        return error, attachments

    def _serialize(self, snapshotting: Snapshotting, artifact: Any) -> bytes:
        try:
            return snapshotting.diffing.to_data(artifact)
        except Exception as exc:
            raise protocol_violation_error(reason="serialization failed", original_error=exc) from exc

    def _ensure_directory(self, directory: Path) -> None:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise storage_error(exc, path=str(directory), operation="mkdir") from exc

    def _write(self, path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise storage_error(exc, path=str(path), operation="write") from exc
        logger.debug("Wrote snapshot", extra={"path": str(path), "bytes": len(data)})

    def _read(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise storage_error(exc, path=str(path), operation="read") from exc

    def _write_failed_artifact(self, identity: SnapshotIdentity, data: bytes) -> Optional[Path]:
        """Keep the failing artifact next to other failures for inspection."""
        failed_path = self.settings.effective_artifacts_dir / identity.file_base_name / identity.file_name
        try:
            failed_path.parent.mkdir(parents=True, exist_ok=True)
            failed_path.write_bytes(data)
        except OSError as exc:
            logger.warning(
                "Couldn't write failed snapshot artifact",
                extra={"path": str(failed_path), "error": str(exc)},
            )
            return None
        return failed_path

    def _diff_command(self, reference: Path, failed: Optional[Path]) -> str:
        if failed is None:
            return f"Reference: \"{reference}\""

        template = current_diff_tool(self.settings)
        if template:
            quoted_reference = shlex.quote(str(reference))
            quoted_failed = shlex.quote(str(failed))
            if "{reference}" in template or "{actual}" in template:
                try:
                    return template.format(reference=quoted_reference, actual=quoted_failed)
                except (KeyError, IndexError, ValueError):
                    pass
            return f"{template} {quoted_reference} {quoted_failed}"

        return f"@−\n\"file://{reference}\"\n@+\n\"file://{failed}\""

    def _failure(
        self,
        operation: str,
        error: SnapflowError,
        location: SourceLocation,
        path: Optional[Path],
        attachments: Optional[List[Attachment]] = None,
    ) -> SnapshotFailure:
        status = "recorded" if error.error_code == ErrorCode.RECORDED_SNAPSHOT else "failed"
        self.metrics.record_outcome(operation, status, error.error_code.value)
        logger.info(
            "Snapshot failed",
            extra={
                "error_code": error.error_code.value,
                "path": str(path) if path is not None else None,
                "location": location.describe(),
            },
        )
        return SnapshotFailure(
            message=error.message,
            error_code=error.error_code,
            location=location,
            path=path,
            attachments=attachments or [],
        )

