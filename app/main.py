# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Mando API gateway.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   python -m app.main              (binds API_HOST:API_PORT from settings)
#   uvicorn app.main:app --reload --port 4000
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.config import settings
from app.exceptions import register_exception_handlers
from app.middleware import (
    ErrorBoundaryMiddleware,
    OriginCORSMiddleware,
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from app.openapi import configure_openapi
from app.routers import files, notifications, root
from lib.cors_origin import OriginValidator
from lib.http_client import create_http_client

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: create the shared outbound HTTP client
    - Shutdown: close it
    """
    logger.info(f"Starting Mando API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS static domains: {settings.cors_static_domains_list}")

    app.state.http_client = create_http_client(
        timeout=settings.HTTP_CLIENT_TIMEOUT,
        body_limit=settings.OUTBOUND_LOG_BODY_LIMIT,
    )

    yield

    logger.info("Shutting down Mando API")
    await app.state.http_client.aclose()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware order, outermost first:
    RequestId -> RequestLogging -> CORS -> SecurityHeaders -> ErrorBoundary
    (add_middleware() prepends, so they are added in reverse).
    """
    app = FastAPI(
        title=settings.API_TITLE,
        description="""
## Mando API

Gateway for the Mando services.

Every error response has the same shape:

```json
{"code": "NOT_FOUND", "message": "The requested resource /api/x was not found", "requestId": "req_1234"}
```

Include the `requestId` (also returned in the `X-Request-Id` header) when reporting a problem.
""",
        version=settings.API_VERSION,
        # Served by configure_openapi() under the API base path
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Root",
                "description": "Liveness endpoints",
            },
            {
                "name": "Notifications",
                "description": "Notification provider diagnostics",
            },
            {
                "name": "Files",
                "description": "Upload validation and allowed file types",
            },
        ],
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(ErrorBoundaryMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        OriginCORSMiddleware,
        validator=OriginValidator(settings.cors_static_domains_list),
        allow_headers=settings.cors_allow_headers_list,
        expose_headers=[settings.REQUEST_ID_HEADER, "Server-Timing"],
        max_age=settings.CORS_MAX_AGE,
    )
    app.add_middleware(RequestLoggingMiddleware, log_bodies=settings.LOG_REQUEST_BODIES)
    app.add_middleware(RequestIdMiddleware, header_name=settings.REQUEST_ID_HEADER)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routers
    # =========================================================================

    base = settings.base_path

    app.include_router(root.router, prefix=base, tags=["Root"])

    app.include_router(
        notifications.router,
        prefix=f"{base}/notifications",
        tags=["Notifications"]
    )

    app.include_router(
        files.router,
        prefix=f"{base}/files",
        tags=["Files"]
    )

    configure_openapi(app)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
