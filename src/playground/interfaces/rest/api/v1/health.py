"""
Health check routes.
"""
import time

from fastapi import APIRouter, Request

from playground.interfaces.rest.schemas.response import HealthResponse, PingResponse

router = APIRouter(tags=["health"])

_start_time = time.time()


@router.get("/ping", response_model=PingResponse)
async def ping(request: Request) -> PingResponse:
    """Liveness probe; the message comes from PING_MESSAGE."""
    return PingResponse(message=request.app.state.settings.ping_message)


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=request.app.state.settings.app_version,
        uptime=time.time() - _start_time,
    )
