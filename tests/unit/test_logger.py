"""
Unit tests for the JSON log formatter and request id helpers.
"""

from __future__ import annotations

import json
import logging

from hobbyconnect.core.logger import JSONFormatter, RequestIdFilter, ensure_request_id


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("hobbyconnect.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_single_line_json():
    line = JSONFormatter().format(_record(event="auth.login", user_id="u1", secret="x"))
    payload = json.loads(line)

    assert "\n" not in line
    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["event"] == "auth.login"
    assert payload["user_id"] == "u1"
    assert "secret" not in payload


def test_filter_outside_request_sets_none():
    record = _record()
    assert RequestIdFilter().filter(record) is True
    assert record.request_id is None


def test_request_id_reuses_incoming_header(app):
    with app.test_request_context("/", headers={"X-Request-ID": "req-42"}):
        assert ensure_request_id() == "req-42"
        assert ensure_request_id() == "req-42"


def test_request_id_is_generated_once_per_request(app):
    with app.test_request_context("/"):
        first = ensure_request_id()
        assert first
        assert ensure_request_id() == first
