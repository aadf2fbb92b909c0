import os
import tempfile
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from pydantic import AliasChoices, Field, field_validator

from snapflow.common.exceptions import configuration_error
from snapflow.constants import DEFAULT_SNAPSHOTS_DIRNAME, DEFAULT_TIMEOUT_SECONDS, RecordMode
from snapflow.logging import LOGGER_NAME, get_logger
from .base import SnapflowBaseSettings


logger = get_logger(__name__)

_TRUTHY = {"true", "1", "yes", "on"}
_FALSY = {"false", "0", "no", "off", ""}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def coerce_record_mode(value: Union[RecordMode, bool, str]) -> RecordMode:
    """Normalize a record setting into a RecordMode.

    Booleans map to ``ALL`` (recording on) and ``MISSING`` (recording off),
    which keeps ``SNAPSHOT_TESTING_RECORD=true`` working alongside the
    explicit mode names.

    Raises:
        ValueError: If the value names no known mode
    """
    if isinstance(value, RecordMode):
        return value
    if isinstance(value, bool):
        return RecordMode.ALL if value else RecordMode.MISSING

    normalized = str(value).strip().lower()
    if normalized in _TRUTHY:
        return RecordMode.ALL
    if normalized in _FALSY:
        return RecordMode.MISSING
    try:
        return RecordMode(normalized)
    except ValueError:
        valid = ", ".join(mode.value for mode in RecordMode)
        raise ValueError(f"Unknown record mode: {value!r}. Use one of: {valid}") from None


class _Settings(SnapflowBaseSettings):

    record: RecordMode = Field(
        default=RecordMode.MISSING,
        description="When to write reference snapshots: all, missing, never or failed. "
                    "Booleans are accepted (true means all)."
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Default number of seconds to wait for an asynchronous capture"
    )
    snapshots_dirname: str = Field(
        default=DEFAULT_SNAPSHOTS_DIRNAME,
        description="Name of the directory created next to test files to hold references"
    )
    strip_name_separator: bool = Field(
        default=False,
        description="Drop the '_' after the 'test' prefix when deriving default snapshot names "
                    "(test_renders_header -> renders_header instead of _renders_header)"
    )
    artifacts_dir: Optional[Path] = Field(
        default=None,
        validation_alias=AliasChoices("SNAPSHOT_TESTING_ARTIFACTS_DIR", "SNAPSHOT_ARTIFACTS", "artifacts_dir"),
        description="Directory receiving failed snapshots for inspection. Defaults to the system temp dir."
    )
    diff_tool: Optional[str] = Field(
        default=None,
        description="Command template shown on mismatch, with {reference} and {actual} placeholders "
                    "(e.g. 'ksdiff {reference} {actual}')"
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for the snapflow logger tree"
    )

    @field_validator("record", mode="before")
    @classmethod
    def validate_record(cls, v: Any) -> RecordMode:
        return coerce_record_mode(v)

    @field_validator("snapshots_dirname")
    @classmethod
    def validate_snapshots_dirname(cls, v: str) -> str:
        """Ensure the snapshots directory name is a single path component."""
        if not v or not v.strip():
            raise ValueError("snapshots_dirname cannot be empty")
        if os.sep in v or (os.altsep and os.altsep in v) or v in (".", ".."):
            raise ValueError(f"snapshots_dirname must be a single path component, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Use one of {sorted(_LOG_LEVELS)}")
        return level

    @property
    def effective_artifacts_dir(self) -> Path:
        """Directory that receives failed snapshots."""
        if self.artifacts_dir is not None:
            return self.artifacts_dir
        return Path(tempfile.gettempdir())


_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance.

    Settings are loaded from ``SNAPSHOT_TESTING_*`` environment variables
    (and a ``.env`` file) on first access. ``log_level`` is applied to the
    ``snapflow`` logger; handlers are left to the host, which can call
    ``snapflow.logging.setup_logging`` for JSON output.

    Args:
        force_reload: If True, creates a new settings instance even if
            one already exists. Useful for testing or when environment
            variables have changed.

    Returns:
        The singleton _Settings instance

    Raises:
        SnapflowError: With CONFIG_ERROR code when the environment holds
            invalid values
    """
    global _settings

    if _settings is None or force_reload:
        try:
            _settings = _Settings()
        except ValueError as exc:
            raise configuration_error(f"Invalid snapshot testing configuration: {exc}", cause=exc) from exc
        get_logger(LOGGER_NAME).setLevel(_settings.log_level)
        logger.debug("Loaded snapshot settings", extra={"record": _settings.record.value})

    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)


_overrides: ContextVar[Dict[str, Any]] = ContextVar("snapshot_testing_overrides", default={})


@contextmanager
def with_snapshot_testing(
    record: Optional[Union[RecordMode, bool, str]] = None,
    diff_tool: Optional[str] = None,
) -> Iterator[None]:
    """Override snapshot configuration for the enclosed block.

    Overrides nest: inner blocks inherit values they don't set. They are
    stored in a context variable, so concurrent tests in other threads or
    tasks are unaffected.

    Example:
        >>> with with_snapshot_testing(record="all"):
        ...     assert_snapshot("hello", lines)
    """
    current = dict(_overrides.get())
    if record is not None:
        current["record"] = coerce_record_mode(record)
    if diff_tool is not None:
        current["diff_tool"] = diff_tool

    token = _overrides.set(current)
    try:
        yield
    finally:
        _overrides.reset(token)


def current_record_mode(settings: Optional[_Settings] = None) -> RecordMode:
    """Record mode in effect for the current context."""
    overrides = _overrides.get()
    if "record" in overrides:
        return overrides["record"]
    return (settings if settings is not None else get_settings()).record


def current_diff_tool(settings: Optional[_Settings] = None) -> Optional[str]:
    """Diff tool template in effect for the current context."""
    overrides = _overrides.get()
    if "diff_tool" in overrides:
        return overrides["diff_tool"]
    return (settings if settings is not None else get_settings()).diff_tool
