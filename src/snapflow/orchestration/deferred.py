from typing import Any, Callable, Generic, TypeVar


Value = TypeVar("Value")


class Deferred(Generic[Value]):
    """A value built on demand by the orchestrator.

    Wrapping construction lets a failure while building the value be
    reported as a snapshot failure instead of escaping into the test.

    Example:
        >>> assert_snapshot(Deferred(lambda: render_header(user)), strategies.lines)
    """

    def __init__(self, factory: Callable[[], Value]):
        self.factory = factory

    def resolve(self) -> Value:
        return self.factory()


def resolve_value(value: Any) -> Any:
    """Unwrap ``Deferred`` values; anything else is returned unchanged."""
    if isinstance(value, Deferred):
        return value.resolve()
    return value
