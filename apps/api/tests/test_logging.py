"""Structured logging: redaction and JSON output."""

from __future__ import annotations

import json
import logging

import pytest

from navo_api import logging_config
from navo_api.logging_config import (
    REDACTED,
    JsonFormatter,
    RequestLogger,
    redact,
)


def test_redacts_sensitive_keys_recursively():
    data = {
        "route": "GRU-LIS",
        "Authorization": "Bearer abc",
        "nested": {"client_secret": "x", "items": [{"access_token": "t"}]},
        "amadeus_token": "t2",
    }

    assert redact(data) == {
        "route": "GRU-LIS",
        "Authorization": REDACTED,
        "nested": {"client_secret": REDACTED, "items": [{"access_token": REDACTED}]},
        "amadeus_token": REDACTED,
    }


def test_redact_depth_limit():
    deep: dict = {}
    node = deep
    for _ in range(10):
        node["next"] = {}
        node = node["next"]

    flattened = json.dumps(redact(deep))
    assert "[MAX_DEPTH]" in flattened


def test_configured_secrets_are_scrubbed(monkeypatch):
    monkeypatch.setattr(logging_config, "_secret_values", ["s3cr3t"])
    assert redact({"message": "login with s3cr3t failed"}) == {
        "message": f"login with {REDACTED} failed"
    }


@pytest.fixture
def capture():
    records: list[logging.LogRecord] = []

    class _Handler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    logger = logging.getLogger("navo.test")
    handler = _Handler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield logger, records
    logger.removeHandler(handler)


def test_request_logger_moves_kwargs_into_event_data(capture):
    logger, records = capture

    RequestLogger(logger, "search_abc").info("FLIGHT_SEARCH_SUCCESS", count=7)

    (record,) = records
    assert record.getMessage() == "FLIGHT_SEARCH_SUCCESS"
    assert record.event_data == {"request_id": "search_abc", "count": 7}


def test_json_formatter(capture):
    logger, records = capture

    RequestLogger(logger, "pop_1").warning(
        "RATE_LIMITED", policy="search", token="leak"
    )
    line = json.loads(JsonFormatter().format(records[0]))

    assert line["level"] == "warning"
    assert line["event"] == "RATE_LIMITED"
    assert line["logger"] == "navo.test"
    assert line["request_id"] == "pop_1"
    assert line["policy"] == "search"
    assert line["token"] == REDACTED
    assert "ts" in line


def test_json_formatter_includes_exception(capture):
    logger, records = capture

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        RequestLogger(logger).exception("UNHANDLED_ERROR")

    line = json.loads(JsonFormatter().format(records[0]))
    assert "RuntimeError: boom" in line["exception"]
    assert "request_id" not in line
