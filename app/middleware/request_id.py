# =============================================================================
# app/middleware/request_id.py - Request Id Middleware
# =============================================================================
# Gives every request an id that ends up in logs, error bodies ("requestId")
# and the response header, so a client-reported failure can be found in logs.
# =============================================================================

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# Accepted inbound ids: up to 255 chars of [A-Za-z0-9_-=]
VALID_REQUEST_ID = re.compile(r"^[\w\-=]{1,255}$", re.ASCII)


def resolve_request_id(inbound: str | None) -> str:
    """Reuse a well-formed inbound id, otherwise generate a UUID4."""
    if inbound and VALID_REQUEST_ID.match(inbound):
        return inbound
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Store the request id on request.state and echo it in the response."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-Id"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(self.header_name))
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
