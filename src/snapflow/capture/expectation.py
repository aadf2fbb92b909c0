"""One-shot completion signal with a bounded blocking wait."""

import threading
from typing import Any, Generic, Optional, TypeVar

from snapflow.capture.async_value import Failure
from snapflow.constants import CaptureOutcome
from snapflow.logging import get_logger


logger = get_logger(__name__)

Value = TypeVar("Value")


class Expectation(Generic[Value]):
    """A completion that must be signalled exactly once.

    ``fulfill`` may be called from any thread. ``wait`` blocks the caller
    until the first fulfilment or the deadline, then closes the
    expectation: anything delivered afterwards is dropped and can never
    reach the caller.

    Example:
        >>> expectation = Expectation()
        >>> Async.of("hello").run(expectation.fulfill)
        >>> expectation.wait(1.0)
        <CaptureOutcome.COMPLETED: 'completed'>
        >>> expectation.value
        'hello'
    """

    def __init__(self, description: str = "Took snapshot"):
        self.description = description
        self._lock = threading.Lock()
        self._fulfilled = threading.Event()
        self._fulfillment_count = 0
        self._closed = False
        self._value: Optional[Value] = None
        self._error: Optional[BaseException] = None

    def fulfill(self, value: Any) -> None:
        """Signal completion with a value or a ``Failure``."""
        with self._lock:
            if self._closed:
                logger.debug(
                    "Ignoring completion delivered after the wait ended",
                    extra={"expectation": self.description},
                )
                return

            self._fulfillment_count += 1
            if self._fulfillment_count > 1:
                logger.warning(
                    "Expectation fulfilled more than once",
                    extra={"expectation": self.description, "count": self._fulfillment_count},
                )
            elif isinstance(value, Failure):
                self._error = value.error
            else:
                self._value = value
            self._fulfilled.set()

    def wait(self, timeout: float) -> CaptureOutcome:
        """Block until fulfilled or ``timeout`` seconds elapse.

        Returns:
            COMPLETED after a single successful fulfilment, TIMED_OUT when
            nothing arrived in time, ABORTED on a failure or a repeated
            fulfilment.
        """
        self._fulfilled.wait(timeout)
        with self._lock:
            self._closed = True
            if self._fulfillment_count == 0:
                return CaptureOutcome.TIMED_OUT
            if self._fulfillment_count > 1 or self._error is not None:
                return CaptureOutcome.ABORTED
            return CaptureOutcome.COMPLETED

    @property
    def value(self) -> Optional[Value]:
        return self._value

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def fulfillment_count(self) -> int:
        return self._fulfillment_count
