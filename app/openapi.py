# =============================================================================
# app/openapi.py - OpenAPI Documentation
# =============================================================================
# Serves the OpenAPI 3.1 document and a Swagger UI under the API base path:
#   GET /api/openapi.json
#   GET /api/swagger
#
# The document lists the current origin as its only server, so "Try it out"
# in the UI always hits the environment the docs were loaded from.
# =============================================================================

from urllib.parse import urlsplit

from fastapi import FastAPI, Request
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse, JSONResponse

from app.config import settings


def get_origin_url(request: Request) -> str:
    """
    Origin ("scheme://host[:port]") of the caller.

    Prefers the Origin header, then Referer, then the request URL itself.
    """
    url = request.headers.get("origin") or request.headers.get("referer") or str(request.url)
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        parts = urlsplit(str(request.url))
    return f"{parts.scheme}://{parts.netloc}"


def build_openapi_schema(app: FastAPI, server_url: str) -> dict:
    """Generate the OpenAPI document for `app` with a single server entry."""
    schema = get_openapi(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        openapi_version="3.1.0",
        description=app.description,
        routes=app.routes,
        tags=app.openapi_tags,
        servers=[{"url": server_url, "description": "Current environment"}],
    )
    components = schema.setdefault("components", {})
    components.setdefault("securitySchemes", {})["Bearer"] = {
        "type": "http",
        "scheme": "bearer",
    }
    return schema


def configure_openapi(app: FastAPI) -> None:
    """
    Mount the OpenAPI JSON endpoint and the Swagger UI.

    The app must be created with openapi_url=None and docs_url=None so these
    routes replace FastAPI's defaults.
    """
    base = settings.base_path
    openapi_path = f"{base}/openapi.json"

    @app.get(openapi_path, include_in_schema=False)
    async def openapi_json(request: Request) -> JSONResponse:
        return JSONResponse(build_openapi_schema(app, get_origin_url(request)))

    @app.get(f"{base}/swagger", include_in_schema=False)
    async def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(openapi_url=openapi_path, title=settings.API_TITLE)
