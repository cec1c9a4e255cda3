# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides TestClient fixtures (with the app lifespan running)
# - Provides an app with extra routes that raise each kind of error
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("NOVU_SECRET_KEY", "test-novu-key")
os.environ.setdefault("NOVU_SERVER_URL", "https://novu.test")

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.exceptions import ApiError
from app.main import app, create_app
from core.models.errors import ErrorCode


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """TestClient for the real application."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def error_app():
    """Fresh application with routes that raise every kind of error."""
    error_app = create_app()

    async def rate_limited():
        raise ApiError(ErrorCode.RATE_LIMITED, "too many requests")

    async def api_server_error():
        raise ApiError(ErrorCode.INTERNAL_SERVER_ERROR, "upstream exploded")

    async def unauthorized():
        raise HTTPException(status_code=401, detail="Missing token")

    async def teapot():
        raise HTTPException(status_code=418, detail="I'm a teapot")

    async def missing_item():
        raise HTTPException(status_code=404, detail="Item missing")

    async def boom():
        raise RuntimeError("kaboom")

    async def silent_boom():
        raise RuntimeError()

    error_app.add_api_route("/api/test/rate-limited", rate_limited)
    error_app.add_api_route("/api/test/api-server-error", api_server_error)
    error_app.add_api_route("/api/test/unauthorized", unauthorized)
    error_app.add_api_route("/api/test/teapot", teapot)
    error_app.add_api_route("/api/test/missing-item", missing_item)
    error_app.add_api_route("/api/test/boom", boom)
    error_app.add_api_route("/api/test/silent-boom", silent_boom)
    return error_app


@pytest.fixture
def error_client(error_app):
    """TestClient for error_app."""
    with TestClient(error_app) as test_client:
        yield test_client
