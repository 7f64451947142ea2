"""Structured Logging - JSON formatter and idempotent setup."""

import json
import logging

import pytest

from userapi.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "userapi.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "userapi.test"
    assert log["message"] == "hello world"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras():
    log = json.loads(JSONFormatter().format(
        _record(error_code="NOT_FOUND", path="/api/users/1", unrelated="x"),
    ))
    assert log["error_code"] == "NOT_FOUND"
    assert log["path"] == "/api/users/1"
    assert "unrelated" not in log


@pytest.fixture
def restore_root_logger():
    handlers, level = list(logging.root.handlers), logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def test_setup_logging_is_idempotent(restore_root_logger):
    setup_logging("DEBUG", "json")
    handler = setup_logging("DEBUG", "json")
    named = [h for h in logging.root.handlers if h.get_name() == "userapi"]
    assert named == [handler]
    assert isinstance(handler.formatter, JSONFormatter)
    assert logging.root.level == logging.DEBUG


def test_setup_logging_text_format(restore_root_logger):
    handler = setup_logging("info", "text")
    assert not isinstance(handler.formatter, JSONFormatter)
    assert logging.root.level == logging.INFO
