# =============================================================================
# app/middleware/cors.py - CORS Middleware
# =============================================================================
# Applies the verdict of lib/cors_origin.OriginValidator to every response:
#
#   Allow(origin) -> Access-Control-Allow-Origin: <origin>
#                    Access-Control-Allow-Credentials: true
#   AllowAny      -> Access-Control-Allow-Origin: *   (never with credentials)
#   Reject        -> no CORS headers, the browser blocks the response
#
# Preflight requests are answered here and never reach a route.
# =============================================================================

import logging
from typing import Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from lib.cors_origin import Allow, AllowAny, OriginValidator, ValidationResult

logger = logging.getLogger(__name__)

DEFAULT_ALLOW_METHODS = ("GET", "HEAD", "PUT", "POST", "DELETE", "PATCH")


def is_preflight(request: Request) -> bool:
    return (
        request.method == "OPTIONS"
        and "origin" in request.headers
        and "access-control-request-method" in request.headers
    )


class OriginCORSMiddleware(BaseHTTPMiddleware):
    """
    Credentialed CORS driven by an OriginValidator.

    Args:
        app: The wrapped ASGI app
        validator: Decides how each Origin is reflected
        allow_headers: Headers permitted in preflight requests
        allow_methods: Methods permitted in preflight requests
        expose_headers: Response headers readable by browser scripts
        max_age: Seconds a preflight may be cached (omitted when None)
    """

    def __init__(
        self,
        app: ASGIApp,
        validator: OriginValidator,
        allow_headers: Sequence[str] = (),
        allow_methods: Sequence[str] = DEFAULT_ALLOW_METHODS,
        expose_headers: Sequence[str] = (),
        max_age: int | None = None,
    ):
        super().__init__(app)
        self.validator = validator
        self.allow_headers = list(allow_headers)
        self.allow_methods = list(allow_methods)
        self.expose_headers = list(expose_headers)
        self.max_age = max_age

    def origin_headers(self, verdict: ValidationResult) -> dict[str, str]:
        """Access-Control-Allow-* headers for a verdict (empty for Reject)."""
        if isinstance(verdict, Allow):
            return {
                "Access-Control-Allow-Origin": verdict.origin,
                "Access-Control-Allow-Credentials": "true",
            }
        if isinstance(verdict, AllowAny):
            return {"Access-Control-Allow-Origin": "*"}
        return {}

    def preflight_response(self, request: Request, verdict: ValidationResult) -> Response:
        headers = self.origin_headers(verdict)
        if headers:
            headers["Access-Control-Allow-Methods"] = ",".join(self.allow_methods)
            if self.allow_headers:
                headers["Access-Control-Allow-Headers"] = ",".join(self.allow_headers)
            elif "access-control-request-headers" in request.headers:
                headers["Access-Control-Allow-Headers"] = request.headers["access-control-request-headers"]
            if self.max_age is not None:
                headers["Access-Control-Max-Age"] = str(self.max_age)

        response = Response(status_code=204, headers=headers)
        response.headers.append("Vary", "Origin")
        return response

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")
        verdict = self.validator.validate(origin)

        if isinstance(verdict, Allow) and not verdict.trusted:
            logger.debug(f"Mirroring unregistered origin: {origin}")
        elif not isinstance(verdict, (Allow, AllowAny)):
            logger.info(f"Rejected malformed CORS origin: {origin!r}")

        if is_preflight(request):
            return self.preflight_response(request, verdict)

        response = await call_next(request)

        headers = self.origin_headers(verdict)
        for name, value in headers.items():
            response.headers[name] = value
        if headers and self.expose_headers:
            response.headers["Access-Control-Expose-Headers"] = ",".join(self.expose_headers)
        if isinstance(verdict, Allow):
            response.headers.append("Vary", "Origin")
        return response
