"""Tests for error codes and helper constructors."""

from snapflow.common.exceptions import (
    ErrorCode,
    SnapflowError,
    capture_timeout_error,
    configuration_error,
    construction_error,
    protocol_violation_error,
    recorded_snapshot_error,
    storage_error,
)


class TestSnapflowError:
    """Test the base exception."""

    def test_str_includes_code(self):
        error = SnapflowError("boom", error_code=ErrorCode.IO_ERROR)
        assert str(error) == "[IO_001] boom"

    def test_str_includes_cause(self):
        error = SnapflowError("boom", cause=KeyError("k"))
        assert str(error) == "[CAPTURE_002] boom (caused by: KeyError: 'k')"

    def test_to_dict(self):
        error = SnapflowError("boom", error_code=ErrorCode.SNAPSHOT_MISMATCH, details={"path": "/x"})

        assert error.to_dict() == {
            "type": "SnapflowError",
            "message": "boom",
            "error_code": "SNAPSHOT_001",
            "error_name": "SNAPSHOT_MISMATCH",
            "details": {"path": "/x"},
        }

    def test_from_error_code(self):
        error = SnapflowError.from_error_code(ErrorCode.CONFIG_ERROR, "bad", details={"k": 1})

        assert error.error_code == ErrorCode.CONFIG_ERROR
        assert error.details == {"k": 1}


class TestHelpers:
    """Test the helper constructors."""

    def test_configuration_error(self):
        error = configuration_error("bad timeout", config_key="timeout")

        assert error.error_code == ErrorCode.CONFIG_ERROR
        assert error.details == {"config_key": "timeout"}

    def test_construction_error_uses_original_message(self):
        original = ValueError("no data")
        error = construction_error(original)

        assert error.message == "no data"
        assert error.cause is original
        assert error.details["error_type"] == "ValueError"

    def test_construction_error_without_message(self):
        assert construction_error(RuntimeError()).message == "RuntimeError"

    def test_capture_timeout_error(self):
        error = capture_timeout_error(5.0)

        assert error.error_code == ErrorCode.CAPTURE_TIMEOUT
        assert error.message.startswith("Exceeded timeout of 5.0 seconds waiting for snapshot.")
        assert error.details["timeout"] == 5.0

    def test_protocol_violation_error(self):
        assert protocol_violation_error().message == "Couldn't snapshot value"
        assert protocol_violation_error(original_error=OSError("gone")).message == "Couldn't snapshot value: gone"

    def test_storage_error(self):
        error = storage_error(PermissionError("denied"), path="/snaps", operation="mkdir")

        assert error.error_code == ErrorCode.IO_ERROR
        assert error.details == {"path": "/snaps", "operation": "mkdir"}

    def test_recorded_snapshot_error(self):
        error = recorded_snapshot_error("/snaps/g.txt")

        assert error.error_code == ErrorCode.RECORDED_SNAPSHOT
        assert 'open "/snaps/g.txt"' in error.message
