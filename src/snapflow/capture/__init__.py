"""Asynchronous capture protocol.

A strategy's capture returns an ``Async``. ``capture`` runs it, blocks on an
``Expectation`` for a bounded time and reports the outcome as a
``CaptureResult``.
"""

from snapflow.capture.async_value import Async, Failure
from snapflow.capture.expectation import Expectation
from snapflow.capture.runner import CaptureResult, capture

__all__ = [
    "Async",
    "Failure",
    "Expectation",
    "CaptureResult",
    "capture",
]
