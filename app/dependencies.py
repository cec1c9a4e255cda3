# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

import httpx
from fastapi import Depends, Request

from app.config import settings
from app.context import RequestContext
from app.exceptions import ApiError
from core.models.errors import ErrorCode
from lib.notifications import NotificationError, NovuClient


def get_request_context(request: Request) -> RequestContext:
    """Request id, method and path of the current request."""
    return RequestContext.from_request(request)


def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared, instrumented outbound HTTP client.

    Created in the app lifespan (see app/main.py).
    """
    return request.app.state.http_client


def get_notification_client(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> NovuClient:
    """
    Build a Novu client on top of the shared HTTP client.

    Raises:
        ApiError: INTERNAL_SERVER_ERROR when Novu is not configured
    """
    try:
        return NovuClient(
            http_client,
            secret_key=settings.NOVU_SECRET_KEY,
            server_url=settings.NOVU_SERVER_URL,
        )
    except NotificationError as e:
        raise ApiError(ErrorCode.INTERNAL_SERVER_ERROR, e.message) from e


# Type aliases for dependency injection
RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]
NotificationClientDep = Annotated[NovuClient, Depends(get_notification_client)]
