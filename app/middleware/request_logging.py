# =============================================================================
# app/middleware/request_logging.py - Request Logging Middleware
# =============================================================================
# Logs one entry when a request comes in and one when the response goes out:
#
#   <-- POST /api/notifications/test {'requestId': ..., 'request': {...}}
#   --> POST /api/notifications/test 200 12ms
#
# The entry log includes headers (credentials redacted), query parameters and,
# for POST/PUT/PATCH, the body parsed as JSON (falls back to text).
# The total duration is also returned in a Server-Timing header.
# =============================================================================

import json
import logging
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
REDACTED_HEADERS = frozenset({"authorization", "cookie", "x-csrf-token"})
# Only these bodies are read for logging; uploads are never buffered here
LOGGABLE_CONTENT_TYPES = ("application/json", "text/", "application/x-www-form-urlencoded")


def redact_headers(headers: Any) -> dict[str, str]:
    return {
        key: "[redacted]" if key.lower() in REDACTED_HEADERS else value
        for key, value in headers.items()
    }


async def read_body_for_log(request: Request) -> Any:
    """Body as parsed JSON, plain text, or a placeholder."""
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(LOGGABLE_CONTENT_TYPES):
        return f"[{content_type or 'unknown'} body]"

    try:
        raw = await request.body()
    except Exception:
        return "Could not read body"

    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Extended request logger with timing."""

    def __init__(self, app: ASGIApp, log_bodies: bool = True):
        super().__init__(app)
        self.log_bodies = log_bodies

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        method = request.method
        path = request.url.path
        start = time.perf_counter()

        body = None
        if self.log_bodies and method in BODY_METHODS:
            body = await read_body_for_log(request)

        logger.info(
            "<-- %s %s %s",
            method,
            path,
            {
                "requestId": getattr(request.state, "request_id", None),
                "request": {
                    "method": method,
                    "path": path,
                    "headers": redact_headers(request.headers),
                    "query": dict(request.query_params),
                    "body": body,
                },
            },
        )

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["Server-Timing"] = f"total;dur={elapsed_ms:.1f}"
        logger.info("--> %s %s %s %dms", method, path, response.status_code, round(elapsed_ms))
        return response
