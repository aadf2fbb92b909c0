"""The diffing contract: storing artifacts as bytes and comparing them."""

import difflib
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from snapflow.types.snapshot import Attachment


Format = TypeVar("Format")

DiffResult = Tuple[str, List[Attachment]]


@dataclass(frozen=True)
class Diffing(Generic[Format]):
    """How artifacts of one format are stored and compared.

    ``to_data`` and ``from_data`` must be inverses with respect to ``diff``:
    writing an artifact, reading it back and diffing it against the
    original reports no difference. Comparison may be approximate; the
    exactness is up to the strategy providing the diffing.

    Attributes:
        to_data: Serializes an artifact to bytes for storage
        from_data: Rebuilds an artifact from stored bytes
        diff: Compares a reference with a fresh artifact. Returns None when
            they match, otherwise a message and optional attachments.
    """

    to_data: Callable[[Format], bytes]
    from_data: Callable[[bytes], Format]
    diff: Callable[[Format, Format], Optional[DiffResult]]

    @classmethod
    def lines(cls) -> "Diffing[str]":
        """Line-based text diffing, stored as UTF-8."""
        return cls(
            to_data=lambda text: text.encode("utf-8"),
            from_data=lambda data: data.decode("utf-8"),
            diff=_diff_lines,
        )

    @classmethod
    def data(cls) -> "Diffing[bytes]":
        """Byte-for-byte diffing of raw data."""
        return cls(
            to_data=bytes,
            from_data=bytes,
            diff=_diff_data,
        )


def _diff_lines(reference: str, actual: str) -> Optional[DiffResult]:
    if reference == actual:
        return None

    patch = "\n".join(
        difflib.unified_diff(
            reference.splitlines(),
            actual.splitlines(),
            fromfile="reference",
            tofile="actual",
            lineterm="",
        )
    )
    if not patch:
        # Same lines, different line endings or trailing newline
        patch = f"--- reference\n+++ actual\n-{reference!r}\n+{actual!r}"

    attachment = Attachment(name="difference.patch", data=patch.encode("utf-8"), content_type="text/x-diff")
    return patch, [attachment]


def _diff_data(reference: bytes, actual: bytes) -> Optional[DiffResult]:
    if reference == actual:
        return None

    offset = next(
        (index for index, (left, right) in enumerate(zip(reference, actual)) if left != right),
        min(len(reference), len(actual)),
    )
    message = (
        f"Expected data to match reference: {len(actual)} bytes does not match "
        f"{len(reference)} byte reference (first difference at byte {offset})"
    )
    return message, []
