from __future__ import annotations

import json
import logging
import sys

import pytest

from user_api.app.core.logging_config import (
    APP_LOGGER_NAME,
    ConsoleFormatter,
    JsonFormatter,
    RequestIdFilter,
    request_id_ctx,
    resolve_level,
    setup_logging,
    uvicorn_log_level,
)


def _record(message: str = "User created successfully", **extra) -> logging.LogRecord:
    record = logging.LogRecord("user_api.handler", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_structured_fields() -> None:
    token = request_id_ctx.set("abc123")
    try:
        record = _record(user_id=7)
        RequestIdFilter().filter(record)
        payload = json.loads(JsonFormatter().format(record))
    finally:
        request_id_ctx.reset(token)

    assert payload["message"] == "User created successfully"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "user_api.handler"
    assert payload["request_id"] == "abc123"
    assert payload["user_id"] == 7
    assert payload["timestamp"].endswith("+00:00")


def test_json_formatter_renders_exceptions() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("user_api", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    payload = json.loads(JsonFormatter().format(record))

    assert "ValueError: boom" in payload["exception"]


def test_console_formatter_appends_fields() -> None:
    line = ConsoleFormatter().format(_record(user_id=7))

    assert "[INFO] user_api.handler [-]: User created successfully" in line
    assert line.endswith("user_id=7")


def test_setup_logging_is_repeatable() -> None:
    root = logging.getLogger()
    logger = setup_logging("DEBUG", "production")
    setup_logging("WARNING", "development")

    ours = [handler for handler in root.handlers if (handler.get_name() or "").startswith("user_api")]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, ConsoleFormatter)
    assert root.level == logging.WARNING
    assert logger.name == APP_LOGGER_NAME


def test_setup_logging_selects_json_in_production() -> None:
    setup_logging("INFO", "production")
    ours = [handler for handler in logging.getLogger().handlers if (handler.get_name() or "").startswith("user_api")]

    assert isinstance(ours[0].formatter, JsonFormatter)
    setup_logging("INFO", "development")


@pytest.mark.parametrize(
    "level, expected",
    [
        ("debug", "debug"),
        ("INFO", "info"),
        ("Warn", "warning"),
        (" error ", "error"),
        ("verbose", "info"),
        ("NOTSET", "info"),
        ("", "info"),
    ],
)
def test_uvicorn_log_level_accepts_any_configured_value(level: str, expected: str) -> None:
    assert uvicorn_log_level(level) == expected


def test_unknown_level_falls_back_to_info() -> None:
    assert resolve_level("verbose") == logging.INFO
    setup_logging("verbose", "development")

    assert logging.getLogger().level == logging.INFO
