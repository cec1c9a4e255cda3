# =============================================================================
# app/middleware/error_boundary.py - Error Boundary
# =============================================================================
# Exceptions with a registered handler (ApiError, HTTPException, validation
# errors) are rendered inside the router. Anything else would otherwise only
# be caught by Starlette's outermost ServerErrorMiddleware, after the CORS,
# request id and security header middleware have already been unwound.
#
# This middleware sits innermost so those responses still get every header,
# and the client always receives the uniform JSON error body.
# =============================================================================

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.context import RequestContext
from app.exceptions import build_error_response


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """Convert any unhandled exception into an error response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return build_error_response(exc, RequestContext.from_request(request))
