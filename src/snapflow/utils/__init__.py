"""Utility functions and helpers for SnapFlow."""

from snapflow.utils.decorators import traced

__all__ = [
    "traced",
]
