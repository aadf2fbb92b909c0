"""Snapshotting strategies.

A strategy pairs a capture function (value to artifact) with the diffing
for that artifact and the file extension used to store it. Strategies are
composed with ``pullback`` and ``async_pullback`` to support new value
types without touching the diffing.
"""

from snapflow.snapshotting.strategy import Snapshotting
from snapflow.snapshotting import strategies

__all__ = [
    "Snapshotting",
    "strategies",
]
