# =============================================================================
# lib/http_client.py - Instrumented Outbound HTTP Client
# =============================================================================
# Every outbound call the API makes goes through one httpx.AsyncClient whose
# transport logs the request, the response, and transport errors:
#
#   [FETCH OUT]      {'requestId': ..., 'url': ..., 'method': 'POST', ...}
#   [FETCH RESPONSE] {'requestId': ..., 'status': 201, 'ok': True, ...}
#   [FETCH ERROR]    {'requestId': ..., 'error': 'ConnectError(...)'}
#
# The client is created once (app lifespan) and handed to whoever needs it.
# Nothing is patched globally; code that builds its own client is not logged.
#
# Usage:
#   from lib.http_client import create_http_client
#
#   async with create_http_client(timeout=10) as client:
#       response = await client.get("https://example.com")
# =============================================================================

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

import httpx

logger = logging.getLogger(__name__)

REDACTED_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


def _safe_headers(headers: httpx.Headers) -> dict[str, str]:
    return {
        key: "[redacted]" if key.lower() in REDACTED_HEADERS else value
        for key, value in headers.items()
    }


def _body_preview(request: httpx.Request, limit: int) -> str | None:
    """First `limit` characters of the request body, if it was buffered."""
    try:
        content = request.content
    except httpx.RequestNotRead:
        return "[Body Object]"
    if not content:
        return None
    return content[:limit].decode("utf-8", errors="replace")


class LoggingTransport(httpx.AsyncBaseTransport):
    """
    Transport wrapper that logs every request passing through it.

    Wraps any other async transport, so tests can put an httpx.MockTransport
    underneath and still exercise the logging.
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        body_limit: int = 200,
        log: logging.Logger | None = None,
    ):
        self._transport = transport or httpx.AsyncHTTPTransport()
        self.body_limit = body_limit
        self.log = log or logger

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        call_id = str(uuid.uuid4())

        self.log.info("[FETCH OUT] %s", {
            "requestId": call_id,
            "url": str(request.url),
            "method": request.method,
            "headers": _safe_headers(request.headers),
            "body": _body_preview(request, self.body_limit),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

        try:
            response = await self._transport.handle_async_request(request)
        except Exception as e:
            self.log.error("[FETCH ERROR] %s", {
                "requestId": call_id,
                "error": repr(e),
            })
            raise

        self.log.info("[FETCH RESPONSE] %s", {
            "requestId": call_id,
            "status": response.status_code,
            "headers": _safe_headers(response.headers),
            "ok": response.is_success,
        })
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()


def create_http_client(
    timeout: float = 10.0,
    body_limit: int = 200,
    transport: httpx.AsyncBaseTransport | None = None,
    **client_kwargs: Any,
) -> httpx.AsyncClient:
    """
    Build the shared outbound client with request logging.

    Args:
        timeout: Timeout in seconds for every call
        body_limit: Max characters of a request body written to the log
        transport: Underlying transport (defaults to a real network transport)
        **client_kwargs: Passed through to httpx.AsyncClient

    Returns:
        httpx.AsyncClient: Caller owns it and must close it
    """
    return httpx.AsyncClient(
        transport=LoggingTransport(transport, body_limit=body_limit),
        timeout=timeout,
        **client_kwargs,
    )
