"""The snapshotting strategy and its composition operators."""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from snapflow.capture.async_value import Async
from snapflow.diffing import Diffing


Value = TypeVar("Value")
NewValue = TypeVar("NewValue")
Format = TypeVar("Format")


@dataclass(frozen=True)
class Snapshotting(Generic[Value, Format]):
    """A strategy for turning values into diffable artifacts.

    Attributes:
        path_extension: File extension for stored references, or None
        diffing: How artifacts are stored and compared
        snapshot: Captures a value as an artifact, possibly asynchronously.
            Must not depend on hidden shared state: equal inputs yield
            equal artifacts.
    """

    path_extension: Optional[str]
    diffing: Diffing[Format]
    snapshot: Callable[[Value], Async[Format]]

    @classmethod
    def simple(cls, diffing: Diffing[Format], path_extension: Optional[str] = None) -> "Snapshotting[Format, Format]":
        """A strategy whose values already are artifacts."""
        return cls(path_extension=path_extension, diffing=diffing, snapshot=Async.of)

    def pullback(self, transform: Callable[[NewValue], Value]) -> "Snapshotting[NewValue, Format]":
        """Adapt the strategy to a new value type.

        The new strategy applies ``transform`` and then delegates capture
        and diffing to this one.

        Example:
            >>> users = lines.pullback(lambda user: f"{user.name} <{user.email}>")
        """
        snapshot = self.snapshot

        return Snapshotting(
            path_extension=self.path_extension,
            diffing=self.diffing,
            snapshot=lambda value: snapshot(transform(value)),
        )

    def async_pullback(self, transform: Callable[[NewValue], Async[Value]]) -> "Snapshotting[NewValue, Format]":
        """Adapt the strategy through an asynchronous transform.

        The resulting capture completes only after ``transform`` and this
        strategy's capture have both finished.
        """
        snapshot = self.snapshot

        return Snapshotting(
            path_extension=self.path_extension,
            diffing=self.diffing,
            snapshot=lambda value: transform(value).flat_map(snapshot),
        )
