# =============================================================================
# app/context.py - Request Context
# =============================================================================
# A small, immutable per-request object built at the HTTP boundary and passed
# explicitly to anything that needs the request id (error responses, logs).
#
# The request id itself is assigned by RequestIdMiddleware and kept on
# request.state; RequestContext.from_request() is the only place that reads it.
# =============================================================================

from dataclasses import dataclass

from starlette.requests import HTTPConnection


@dataclass(frozen=True)
class RequestContext:
    """Request-scoped values threaded through error handling."""
    request_id: str = ""
    method: str = ""
    path: str = ""

    @classmethod
    def from_request(cls, request: HTTPConnection) -> "RequestContext":
        """
        Build the context for a request.

        request_id is "" when the request never passed through the request id
        middleware (e.g. a failure raised before it ran).
        """
        return cls(
            request_id=getattr(request.state, "request_id", "") or "",
            method=request.scope.get("method", ""),
            path=request.url.path,
        )
