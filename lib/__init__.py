# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - cors_origin.py: Decides how a request Origin is reflected in CORS headers
# - http_client.py: Outbound httpx client with request/response logging
# - notifications.py: Novu notification client
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.cors_origin import (
    Allow,
    AllowAny,
    OriginValidator,
    Reject,
    ValidationResult,
    validate_cors_origin,
)
from lib.http_client import LoggingTransport, create_http_client
from lib.notifications import NotificationError, NovuClient

__all__ = [
    # CORS
    "Allow",
    "AllowAny",
    "OriginValidator",
    "Reject",
    "ValidationResult",
    "validate_cors_origin",
    # Outbound HTTP
    "LoggingTransport",
    "create_http_client",
    # Notifications
    "NotificationError",
    "NovuClient",
]
