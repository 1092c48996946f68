"""
Augmented Canvas Backend — Health Check Route
==============================================

What:  GET /health for the plugin's "is the backend running?" probe.
How:   Reports process liveness plus whether a default agent is available.
       Does NOT call the provider (no quota use).

Status levels:
    healthy:   default agent ready (HTTP 200)
    degraded:  no environment credential; requests need a per-call key (HTTP 200)
"""

import time

from fastapi import APIRouter, Depends

from augmented_canvas import __version__
from augmented_canvas.routes.deps import get_canvas_service
from augmented_canvas.schemas.canvas import HealthResponse
from augmented_canvas.services.canvas_service import CanvasService

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(service: CanvasService = Depends(get_canvas_service)) -> HealthResponse:
    ready = service.default_agent.available
    return HealthResponse(
        status="healthy" if ready else "degraded",
        version=__version__,
        default_agent="ready" if ready else "absent",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
