"""Deferred values delivered through a completion callback.

An ``Async`` wraps a ``run`` function that receives a callback and calls it
exactly once with the produced value, either before ``run`` returns or later
from another thread. Failures travel through the same callback as
``Failure`` markers so that composed stages pass them along untouched.
"""

import asyncio
import threading
from concurrent.futures import CancelledError, Future
from typing import Any, Awaitable, Callable, Generic, TypeVar


Value = TypeVar("Value")
NewValue = TypeVar("NewValue")

Callback = Callable[[Any], None]


class Failure:
    """Marker delivered to a callback when an asynchronous stage failed."""

    __slots__ = ("error",)

    def __init__(self, error: BaseException):
        self.error = error

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


class Async(Generic[Value]):
    """A value that becomes available through a callback.

    Example:
        >>> Async.of(41).map(lambda n: n + 1).run(print)
        42
    """

    def __init__(self, run: Callable[[Callback], None]):
        self._run = run

    def run(self, callback: Callback) -> None:
        """Start the computation; ``callback`` receives the value or a Failure."""
        self._run(callback)

    @classmethod
    def of(cls, value: Value) -> "Async[Value]":
        """An Async that completes synchronously with ``value``."""
        return cls(lambda callback: callback(value))

    @classmethod
    def failed(cls, error: BaseException) -> "Async[Any]":
        """An Async that completes synchronously with a failure."""
        return cls(lambda callback: callback(Failure(error)))

    @classmethod
    def from_future(cls, future: "Future[Value]") -> "Async[Value]":
        """Adapt a ``concurrent.futures.Future``; completion fires from the future's done callback."""

        def run(callback: Callback) -> None:
            def on_done(done: "Future[Value]") -> None:
                if done.cancelled():
                    callback(Failure(CancelledError()))
                    return
                error = done.exception()
                callback(Failure(error) if error is not None else done.result())

            future.add_done_callback(on_done)

        return cls(run)

    @classmethod
    def from_awaitable(cls, factory: Callable[[], Awaitable[Value]]) -> "Async[Value]":
        """Run a coroutine on a private event loop in a worker thread.

        ``factory`` is called inside the worker so the coroutine binds to
        that thread's loop. The worker is a daemon thread: a capture that
        times out does not keep the interpreter alive.
        """

        def run(callback: Callback) -> None:
            def worker() -> None:
                try:
                    result = asyncio.run(_await(factory))
                except Exception as exc:
                    callback(Failure(exc))
                    return
                callback(result)

            threading.Thread(target=worker, name="snapflow-capture", daemon=True).start()

        return cls(run)

    def map(self, transform: Callable[[Value], NewValue]) -> "Async[NewValue]":
        """Transform the delivered value; exceptions become failures."""

        def run(callback: Callback) -> None:
            def on_value(value: Any) -> None:
                if isinstance(value, Failure):
                    callback(value)
                    return
                try:
                    result = transform(value)
                except Exception as exc:
                    callback(Failure(exc))
                    return
                callback(result)

            self.run(on_value)

        return Async(run)

    def flat_map(self, transform: Callable[[Value], "Async[NewValue]"]) -> "Async[NewValue]":
        """Chain a second asynchronous stage; completes when both stages finish."""

        def run(callback: Callback) -> None:
            def on_value(value: Any) -> None:
                if isinstance(value, Failure):
                    callback(value)
                    return
                try:
                    following = transform(value)
                except Exception as exc:
                    callback(Failure(exc))
                    return
                following.run(callback)

            self.run(on_value)

        return Async(run)


async def _await(factory: Callable[[], Awaitable[Value]]) -> Value:
    return await factory()
