"""OpenTelemetry entry points.

Only the OpenTelemetry API is used. Spans and metrics are no-ops until the
host process installs an SDK provider.
"""

from typing import Optional

from opentelemetry import metrics, trace

from snapflow.__version__ import __version__

__all__ = [
    "get_tracer",
    "get_meter",
]


def get_tracer(name: str, version: Optional[str] = None) -> trace.Tracer:
    """Tracer for ``name``, versioned with the installed snapflow release by default."""
    return trace.get_tracer(name, version or __version__)


def get_meter(name: str, version: Optional[str] = None) -> metrics.Meter:
    """Meter for ``name``, versioned with the installed snapflow release by default."""
    return metrics.get_meter(name, version or __version__)
