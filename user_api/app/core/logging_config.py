"""
Logging configuration for the application.

The ``setup_logging`` function configures the root logger with a
console handler whose output format depends on the deployment mode:

* ``production`` emits one JSON object per line so that log shippers
  can index the structured fields (``user_id``, ``status``,
  ``duration_ms`` ...) passed through ``extra``.
* every other mode emits readable lines with the timestamp, level,
  logger name and request id, followed by the structured fields as
  ``key=value`` pairs.

The request id of the HTTP request being served is kept in a context
variable set by the request middleware and copied onto every record
by ``RequestIdFilter``.  ``setup_logging`` returns the application
logger; components receive a child of it at construction time instead
of looking up a module level logger.
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


APP_LOGGER_NAME = "user_api"
_HANDLER_NAME = "user_api.console"

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")

_LEVEL_NAMES = frozenset({"CRITICAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG"})

# Attributes every ``LogRecord`` carries; anything else on a record was
# passed through ``extra`` and is treated as a structured field.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "request_id", "taskName"}


def resolve_level(level: str) -> int:
    """Map a level name to its number; unknown names mean ``INFO``."""
    name = level.strip().upper()
    if name in _LEVEL_NAMES:
        return getattr(logging, name)
    return logging.INFO


def uvicorn_log_level(level: str) -> str:
    """Return the name Uvicorn expects for ``level`` (``"info"`` ...)."""
    return logging.getLevelName(resolve_level(level)).lower()


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class RequestIdFilter(logging.Filter):
    """Attach the current request id to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_ctx.get()
        return True


class JsonFormatter(logging.Formatter):
    """Render records as single line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", request_id_ctx.get()),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ConsoleFormatter(logging.Formatter):
    """Readable single line format with trailing ``key=value`` fields."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_ctx.get()
        line = super().format(record)
        fields = _extra_fields(record)
        if fields:
            line += " " + " ".join(f"{key}={value}" for key, value in fields.items())
        return line


def setup_logging(
    level: str = "INFO",
    environment: str = "development",
    logfile: Optional[str] = None,
) -> logging.Logger:
    """Configure the root logger and return the application logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    environment : str
        Deployment mode.  ``"production"`` selects JSON output.
    logfile : Optional[str]
        Path to a file to log messages to, using the same formatter.

    Calling the function again replaces the handlers it installed
    earlier, so ``create_app`` can be invoked repeatedly (as the test
    suite does) without duplicating output.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    for handler in list(root.handlers):
        if handler.get_name() and handler.get_name().startswith(_HANDLER_NAME):
            root.removeHandler(handler)
            handler.close()

    formatter: logging.Formatter
    if environment.lower() == "production":
        formatter = JsonFormatter()
    else:
        formatter = ConsoleFormatter()

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestIdFilter())
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(f"{_HANDLER_NAME}.file")
        file_handler.setFormatter(formatter)
        file_handler.addFilter(RequestIdFilter())
        root.addHandler(file_handler)

    return logging.getLogger(APP_LOGGER_NAME)
