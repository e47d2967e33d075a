"""Structured Logging — verifies JSON log shape and extra field surfacing."""

import json
import logging

from starfield.infrastructure import observability
from starfield.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "starfield.test", logging.INFO, __file__, 1, "Star updated", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "starfield.test"
    assert out["message"] == "Star updated"
    assert "timestamp" in out


def test_json_formatter_surfaces_star_fields():
    out = json.loads(JSONFormatter().format(
        _record(star_id="star:1", star_count=3, error_code=None),
    ))
    assert out["star_id"] == "star:1"
    assert out["star_count"] == 3
    assert "error_code" not in out


def test_json_formatter_surfaces_error_category_and_operation():
    out = json.loads(JSONFormatter().format(
        _record(error_category="storage", operation="save"),
    ))
    assert out["error_category"] == "storage"
    assert out["operation"] == "save"


def test_setup_logging_does_not_stack_handlers():
    level = logging.root.level
    handlers = list(logging.root.handlers)
    previous = observability._handler
    try:
        setup_logging("DEBUG", "text")
        setup_logging("WARNING", "json")
        installed = observability._handler
        assert installed is not None
        assert logging.root.handlers.count(installed) == 1
        assert isinstance(installed.formatter, JSONFormatter)
        stream_handlers = [
            h for h in logging.root.handlers
            if h not in handlers and isinstance(h, logging.StreamHandler)
        ]
        assert stream_handlers == [installed]
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.handlers[:] = handlers
        logging.root.setLevel(level)
        observability._handler = previous
