import json
import logging
import sys

from snapflow.logging.logger import CustomJsonFormatter, get_logger, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="snapflow.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=3,
        msg="wrote %s",
        args=("greeting.txt",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extras():
    payload = json.loads(CustomJsonFormatter().format(_record(path="/snaps/greeting.txt", bytes=5)))

    assert payload["message"] == "wrote greeting.txt"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "snapflow.test"
    assert payload["path"] == "/snaps/greeting.txt"
    assert payload["bytes"] == 5
    assert "timestamp" in payload
    assert "lineno" not in payload


def test_formatter_without_active_span_has_no_trace_ids():
    payload = json.loads(CustomJsonFormatter().format(_record()))
    assert "trace_id" not in payload


def test_formatter_includes_exception():
    try:
        raise ValueError("broken")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(CustomJsonFormatter().format(record))
    assert "ValueError: broken" in payload["exception"]


def test_setup_logging_configures_snapflow_tree_only():
    root_handlers = list(logging.getLogger().handlers)

    setup_logging("info")

    logger = get_logger("snapflow")
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, CustomJsonFormatter)
    assert logging.getLogger().handlers == root_handlers
