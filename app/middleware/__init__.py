# =============================================================================
# app/middleware/ - HTTP Middleware
# =============================================================================
# Cross-cutting request/response concerns, one module each:
# - request_id.py: Assigns and echoes the request id
# - request_logging.py: Logs every request (method, path, headers, body, timing)
# - cors.py: Applies the CORS origin verdict from lib/cors_origin.py
# - security_headers.py: Adds secure response headers
# - error_boundary.py: Converts anything that escaped the handlers to JSON
#
# No business logic belongs here.
# =============================================================================

from app.middleware.cors import OriginCORSMiddleware
from app.middleware.error_boundary import ErrorBoundaryMiddleware
from app.middleware.request_id import RequestIdMiddleware
from app.middleware.request_logging import RequestLoggingMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "OriginCORSMiddleware",
    "ErrorBoundaryMiddleware",
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]
