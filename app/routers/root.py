# =============================================================================
# app/routers/root.py - Root Endpoints
# =============================================================================
# Liveness endpoints for load balancers and quick manual checks.
# =============================================================================

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/")
async def root():
    """Returns a greeting, proving the API is reachable."""
    return {"message": "Hello Mando!"}


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "pong"
