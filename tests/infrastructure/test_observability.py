"""Structured Logging — JSONFormatter output shape and setup_logging idempotence."""

import json
import logging
from datetime import datetime, timezone

import pytest

from todomock.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "todomock.services.store", logging.INFO, __file__, 1,
        "Created %s", ("Todo",), None,
    )
    record.__dict__.update(extra)
    return record


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    httpx_level = logging.getLogger("httpx").level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def test_base_fields():
    record = _record()
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "todomock.services.store"
    assert payload["message"] == "Created Todo"
    assert datetime.fromisoformat(payload["timestamp"]) == datetime.fromtimestamp(
        record.created, timezone.utc,
    )


def test_store_context_is_top_level():
    payload = json.loads(JSONFormatter().format(
        _record(resource="Todo", record_id="t1"),
    ))
    assert payload["resource"] == "Todo"
    assert payload["record_id"] == "t1"
    assert "request" not in payload
    assert "error_code" not in payload


def test_request_context_is_grouped():
    payload = json.loads(JSONFormatter().format(
        _record(method="POST", path="/todos", status=201),
    ))
    assert payload["request"] == {"method": "POST", "path": "/todos", "status": 201}


def test_setup_logging_replaces_its_own_handler(clean_root):
    before = list(clean_root.handlers)
    setup_logging("debug", "json")
    second = setup_logging("info", "text")

    added = [h for h in clean_root.handlers if h not in before]
    assert added == [second]
    assert not isinstance(second.formatter, JSONFormatter)
    assert clean_root.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING


def test_setup_logging_json_formatter(clean_root):
    handler = setup_logging("debug", "json")
    assert isinstance(handler.formatter, JSONFormatter)
    assert clean_root.level == logging.DEBUG
