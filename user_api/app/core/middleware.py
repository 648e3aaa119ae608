"""
Request middleware.

Two HTTP middlewares wrap every request:

* ``assign_request_id`` reuses the inbound ``X-Request-ID`` header or
  generates a new id, exposes it on ``request.state.request_id`` and
  in the logging context, and echoes it on the response.
* ``log_requests`` records method, path, status, client address and
  duration once the request has been handled.

The request id middleware is registered last so that it is the outer
layer and the id is already set when the access line is written.
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request

from .logging_config import request_id_ctx


REQUEST_ID_HEADER = "X-Request-ID"


def _client_address(request: Request) -> str:
    return request.client.host if request.client else "-"


def setup_middleware(app: FastAPI, logger: logging.Logger) -> None:
    """Register the request id and request logging middleware on ``app``."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        fields = {
            "method": request.method,
            "path": request.url.path,
            "client": _client_address(request),
        }
        try:
            response = await call_next(request)
        except Exception:
            fields["status"] = 500
            fields["duration_ms"] = round((time.perf_counter() - start) * 1000, 3)
            logger.exception("Request failed", extra=fields)
            raise
        fields["status"] = response.status_code
        fields["duration_ms"] = round((time.perf_counter() - start) * 1000, 3)
        logger.info("Request completed", extra=fields)
        return response

    @app.middleware("http")
    async def assign_request_id(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
