from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from user_api.app.core.logging_config import request_id_ctx
from user_api.app.core.middleware import REQUEST_ID_HEADER


def test_inbound_request_id_is_reused(client: TestClient) -> None:
    response = client.get("/users", headers={REQUEST_ID_HEADER: "req-123"})

    assert response.headers[REQUEST_ID_HEADER] == "req-123"


def test_request_id_is_generated(client: TestClient) -> None:
    first = client.get("/users").headers[REQUEST_ID_HEADER]
    second = client.get("/users").headers[REQUEST_ID_HEADER]

    assert len(first) == 32
    assert first != second


def test_request_id_is_set_on_error_responses(client: TestClient) -> None:
    response = client.get("/users/abc", headers={REQUEST_ID_HEADER: "bad-id"})

    assert response.status_code == 400
    assert response.headers[REQUEST_ID_HEADER] == "bad-id"


def test_request_is_logged_with_outcome(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        client.get("/users/999999", headers={REQUEST_ID_HEADER: "trace-me"})

    access = [record for record in caplog.records if record.name == "user_api.http"]
    assert len(access) == 1
    record = access[0]
    assert record.getMessage() == "Request completed"
    assert record.method == "GET"
    assert record.path == "/users/999999"
    assert record.status == 404
    assert record.client == "testclient"
    assert record.duration_ms >= 0


def test_handler_logs_carry_request_id(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    seen = []

    class Capture(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            seen.append(request_id_ctx.get())

    handler = Capture()
    logging.getLogger("user_api.handler").addHandler(handler)
    try:
        client.get("/users", headers={REQUEST_ID_HEADER: "ctx-42"})
    finally:
        logging.getLogger("user_api.handler").removeHandler(handler)

    assert seen == ["ctx-42"]
    assert request_id_ctx.get() == "-"
