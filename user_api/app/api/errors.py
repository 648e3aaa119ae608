"""
Exception handlers.

Request validation failures are answered with ``400 Bad Request``
rather than FastAPI's default ``422``, using a single human readable
message: the malformed body, the invalid path id and the invalid date
cases each have a fixed wording, other field errors are listed as
``field: reason``.  Unexpected exceptions are logged with their
traceback and answered with a generic ``500`` body.
"""

import logging
from typing import Any, Dict, Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_api.app.core.dates import INVALID_DATE_MESSAGE


INVALID_BODY_MESSAGE = "Invalid request body"
INVALID_ID_MESSAGE = "Invalid user ID"


def describe_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Collapse Pydantic error entries into one message for the client."""
    errors = list(errors)
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if loc and loc[0] == "path":
            return INVALID_ID_MESSAGE
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if error.get("type") == "json_invalid" or loc == ("body",):
            return INVALID_BODY_MESSAGE
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if loc and loc[-1] == "dob" and error.get("type") == "value_error":
            return INVALID_DATE_MESSAGE
    parts = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        field = ".".join(str(part) for part in loc[1:]) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or INVALID_BODY_MESSAGE


def register_exception_handlers(app: FastAPI, logger: logging.Logger) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = describe_validation_errors(exc.errors())
        logger.warning(
            "Validation error on %s %s",
            request.method,
            request.url.path,
            extra={"error": message},
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception: %s", exc, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
