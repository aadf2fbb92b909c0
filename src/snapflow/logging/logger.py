"""Structured logging for snapshot operations.

Records are rendered as one JSON object per line. Each object carries the
standard fields, the snapshot context injected by ``ContextFilter``, any
``extra=`` fields passed at the call site and, inside a span, the
OpenTelemetry trace and span ids.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet

from opentelemetry import trace


LOGGER_NAME = "snapflow"

# Attributes every LogRecord has; anything else was added via ``extra=`` or a filter.
_STANDARD_ATTRIBUTES: FrozenSet[str] = frozenset(
    vars(logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 0, "", (), None))
) | {"asctime", "message"}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _trace_fields() -> Dict[str, str]:
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return {}
    return {
        "trace_id": format(context.trace_id, "032x"),
        "span_id": format(context.span_id, "016x"),
    }


class CustomJsonFormatter(logging.Formatter):
    """Render log records as JSON lines with snapshot and trace context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in _STANDARD_ATTRIBUTES and key not in entry
        )
        entry.update(_trace_fields())

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "WARNING") -> None:
    """Attach the JSON handler to the ``snapflow`` logger tree.

    Not called by snapflow itself. Once called, snapflow records go to this
    handler only and stop propagating to the root logger.

    Args:
        level: Level for the snapflow loggers, e.g. ``"DEBUG"``.
    """
    level = level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "snapflow_json": {"()": "snapflow.logging.logger.CustomJsonFormatter"},
            },
            "filters": {
                "snapshot_context": {"()": "snapflow.logging.filters.ContextFilter"},
            },
            "handlers": {
                "snapflow_stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "snapflow_json",
                    "filters": ["snapshot_context"],
                    "level": level,
                },
            },
            "loggers": {
                LOGGER_NAME: {
                    "handlers": ["snapflow_stderr"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )
