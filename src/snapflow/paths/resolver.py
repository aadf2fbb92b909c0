"""Deriving reference file locations from a test's identity.

Given a source file ``tests/test_header.py``, a test named
``testRendersHeader`` and the ``txt`` extension, the reference lives at::

    tests/__Snapshots__/test_header/RendersHeader.txt

Every function here is pure: identical inputs always yield the identical
path, across calls and across processes.
"""

import re
import threading
from pathlib import Path
from typing import Dict, Optional, Tuple

from pydantic import ConfigDict, Field, field_validator

from snapflow.constants import DEFAULT_SNAPSHOTS_DIRNAME, TEST_NAME_PREFIX
from snapflow.types.base import SnapflowBaseModel


_NON_WORD = re.compile(r"\W+")
_EDGE_DASH = re.compile(r"^-|-$")

FALLBACK_SNAPSHOT_NAME = "snapshot"


def sanitize_path_component(name: str) -> str:
    """Make ``name`` safe to use as a file name.

    Each run of non-word characters becomes a single ``-``; a leading or
    trailing ``-`` is then dropped.

    Example:
        >>> sanitize_path_component("renders header (dark mode)")
        'renders-header-dark-mode'
    """
    return _EDGE_DASH.sub("", _NON_WORD.sub("-", name))


def default_snapshot_name(test_name: str, strip_separator: bool = False) -> str:
    """Snapshot name derived from a test name.

    A literal leading ``test`` is stripped and the remainder is sanitized.
    With ``strip_separator`` the ``_`` that follows the prefix in a
    snake_case name is dropped as well.

    Example:
        >>> default_snapshot_name("testRendersHeader")
        'RendersHeader'
        >>> default_snapshot_name("test_renders_header")
        '_renders_header'
        >>> default_snapshot_name("test_renders_header", strip_separator=True)
        'renders_header'
        >>> default_snapshot_name("rendersHeader")
        'rendersHeader'
    """
    name = test_name
    if name.startswith(TEST_NAME_PREFIX):
        name = name[len(TEST_NAME_PREFIX):]
        if strip_separator and name.startswith("_"):
            name = name[1:]
    return sanitize_path_component(name)


class SnapshotIdentity(SnapflowBaseModel):
    """Everything that decides where one snapshot is stored.

    Attributes:
        source_file: Test file that made the assertion
        test_name: Name of the test function
        name: Explicit snapshot name, used instead of the test name
        snapshot_directory: Explicit directory, used instead of the default
        counter: Sequence number for several snapshots in one test
        path_extension: File extension from the strategy
        snapshots_dirname: Name of the directory next to the source file
        strip_name_separator: Also drop the ``_`` after the ``test`` prefix
    """

    model_config = ConfigDict(frozen=True)

    source_file: Path
    test_name: str
    name: Optional[str] = None
    snapshot_directory: Optional[Path] = None
    counter: Optional[int] = Field(default=None, ge=1)
    path_extension: Optional[str] = None
    snapshots_dirname: str = DEFAULT_SNAPSHOTS_DIRNAME
    strip_name_separator: bool = False

    @field_validator("path_extension")
    @classmethod
    def normalize_extension(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.lstrip(".") or None

    @property
    def file_base_name(self) -> str:
        """Source file name without its extension."""
        return self.source_file.stem

    @property
    def directory(self) -> Path:
        if self.snapshot_directory is not None:
            return self.snapshot_directory
        return self.source_file.parent / self.snapshots_dirname / self.file_base_name

    @property
    def snapshot_name(self) -> str:
        if self.name is not None:
            sanitized = sanitize_path_component(self.name)
        else:
            sanitized = default_snapshot_name(self.test_name, self.strip_name_separator)
        return sanitized or FALLBACK_SNAPSHOT_NAME

    @property
    def file_name(self) -> str:
        stem = self.snapshot_name
        if self.counter is not None:
            stem = f"{stem}.{self.counter}"
        if self.path_extension:
            return f"{stem}.{self.path_extension}"
        return stem

    @property
    def path(self) -> Path:
        return self.directory / self.file_name


def resolve_snapshot_path(
    source_file: Path,
    test_name: str,
    name: Optional[str] = None,
    snapshot_directory: Optional[Path] = None,
    path_extension: Optional[str] = None,
    counter: Optional[int] = None,
    snapshots_dirname: str = DEFAULT_SNAPSHOTS_DIRNAME,
    strip_name_separator: bool = False,
) -> Path:
    """Resolve the reference path for a snapshot; see ``SnapshotIdentity``."""
    return SnapshotIdentity(
        source_file=source_file,
        test_name=test_name,
        name=name,
        snapshot_directory=snapshot_directory,
        counter=counter,
        path_extension=path_extension,
        snapshots_dirname=snapshots_dirname,
        strip_name_separator=strip_name_separator,
    ).path


class SnapshotCounter:
    """Numbers the unnamed snapshots taken within one test.

    The count for a test restarts whenever a thread moves on to a
    different test, so re-running a test reuses the same file names.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._local = threading.local()
        self._counts: Dict[Tuple[str, str], int] = {}

    def next(self, source_file: Path, test_name: str) -> int:
        key = (str(source_file), test_name)
        with self._lock:
            if getattr(self._local, "current", None) != key:
                self._counts[key] = 0
                self._local.current = key
            self._counts[key] += 1
            return self._counts[key]

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
            self._local = threading.local()
