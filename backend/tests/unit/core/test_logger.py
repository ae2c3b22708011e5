"""Unit tests for the JSON log formatter and request correlation."""

from __future__ import annotations

import json
import logging

from storefront.core.logger import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="storefront.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="auth.login.succeeded",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_known_extras():
    payload = json.loads(
        JSONFormatter().format(_record(identity="alice", reason="ok", request_id="abc"))
    )
    assert payload["message"] == "auth.login.succeeded"
    assert payload["level"] == "INFO"
    assert payload["identity"] == "alice"
    assert payload["reason"] == "ok"
    assert payload["request_id"] == "abc"


def test_ignores_unknown_extras():
    payload = json.loads(JSONFormatter().format(_record(password="hunter2")))
    assert "password" not in payload


def test_request_id_header_is_echoed(client):
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


def test_request_id_generated_when_absent(client):
    resp = client.get("/api/v1/health")
    assert resp.headers.get("X-Request-ID")


def test_each_request_gets_its_own_id(client):
    first = client.get("/api/v1/health", headers={"X-Request-ID": "req-1"})
    second = client.get("/api/v1/health", headers={"X-Request-ID": "req-2"})
    third = client.get("/api/v1/health")

    assert first.headers["X-Request-ID"] == "req-1"
    assert second.headers["X-Request-ID"] == "req-2"
    assert third.headers["X-Request-ID"] not in {"req-1", "req-2"}
