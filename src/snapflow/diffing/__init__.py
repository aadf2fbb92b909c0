"""Diffing contract for snapshot artifacts."""

from snapflow.diffing.base import DiffResult, Diffing

__all__ = [
    "Diffing",
    "DiffResult",
]
