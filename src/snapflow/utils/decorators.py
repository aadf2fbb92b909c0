import functools
from typing import Any, Callable, Dict, Optional, TypeVar

from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from snapflow.telemetry import get_tracer


F = TypeVar("F", bound=Callable[..., Any])

AttributeGetter = Callable[..., Optional[Dict[str, Any]]]

logger = None


def _get_logger():
    """Get logger instance lazily."""
    global logger
    if logger is None:
        from snapflow.logging import get_logger
        logger = get_logger(__name__)
    return logger


def _span_attributes(
    static: Optional[Dict[str, Any]],
    getter: Optional[AttributeGetter],
    args: tuple,
    kwargs: dict,
) -> Dict[str, Any]:
    """Merge static and call-time attributes, dropping None values."""
    merged: Dict[str, Any] = dict(static or {})
    if getter is not None:
        try:
            merged.update(getter(*args, **kwargs) or {})
        except Exception as exc:  # pragma: no cover
            _get_logger().warning("Span attribute getter failed: %s", exc)
    return {key: value for key, value in merged.items() if value is not None}


def _mark_reported_failure(span: Span, result: Any) -> None:
    """Flag spans whose call returned a failure instead of raising one."""
    error_code = getattr(result, "error_code", None)
    if error_code is None:
        return
    span.set_attribute("snapflow.error_code", getattr(error_code, "value", str(error_code)))
    span.set_status(Status(StatusCode.ERROR, getattr(result, "message", "")))


def traced(
    span_name: Optional[str] = None,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    attribute_getter: Optional[AttributeGetter] = None,
) -> Callable[[F], F]:
    """Run the decorated call inside an OpenTelemetry span.

    Snapshot operations report problems by returning a failure object, so
    a returned value carrying an ``error_code`` marks the span as failed
    just like a raised exception does.

    Args:
        span_name: Span name. Defaults to the module-qualified function name.
        kind: Span kind, defaults to INTERNAL.
        attributes: Static span attributes.
        attribute_getter: Called with the decorated function's arguments;
            returns extra attributes for this call.
    """

    def decorator(func: F) -> F:
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer(func.__module__).start_as_current_span(name, kind=kind) as span:
                for key, value in _span_attributes(attributes, attribute_getter, args, kwargs).items():
                    span.set_attribute(key, value)

                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

                _mark_reported_failure(span, result)
                return result

        return wrapper  # type: ignore[return-value]

    return decorator
