"""Value types exchanged between strategies, the orchestrator and reporters."""

from pathlib import Path
from typing import List, Optional

from pydantic import ConfigDict, Field

from snapflow.common.exceptions import ErrorCode
from snapflow.types.base import SnapflowBaseModel


class Attachment(SnapflowBaseModel):
    """A named byte payload attached to a failure, e.g. a rendered diff."""

    model_config = ConfigDict(frozen=True)

    name: str
    data: bytes
    content_type: Optional[str] = None


class SourceLocation(SnapflowBaseModel):
    """Where a snapshot assertion was made.

    Used for default name derivation and to attribute failures to the
    calling test rather than to internal helpers.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    test_name: str
    line: Optional[int] = None

    def describe(self) -> str:
        if self.line is None:
            return self.file
        return f"{self.file}:{self.line}"


class SnapshotFailure(SnapflowBaseModel):
    """A reported snapshot failure.

    Attributes:
        message: Human-readable failure description
        error_code: Category of the failure
        location: Caller location the failure is attributed to
        path: Reference path involved, when one was resolved
        attachments: Extra payloads produced by the diff
    """

    message: str
    error_code: ErrorCode
    location: SourceLocation
    path: Optional[Path] = None
    attachments: List[Attachment] = Field(default_factory=list)

    def describe(self) -> str:
        """Render the failure the way a test runner prints it."""
        return f"{self.location.describe()}: {self.message}"
