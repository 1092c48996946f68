"""
Augmented Canvas Backend — Model Configuration Routes
======================================================

What:  GET/POST /api/model-config, a pass-through to the ConfigStore.
Note:  Updating the config does not rebuild the default agent; calls that
       fall back to it keep using the agent built at startup.
"""

import logging

from fastapi import APIRouter, Depends, Response

from augmented_canvas.models import ModelConfig
from augmented_canvas.routes.deps import get_canvas_service
from augmented_canvas.services.canvas_service import CanvasService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Config"])


@router.get("/model-config", response_model=ModelConfig, summary="Current model configuration")
async def get_model_config(service: CanvasService = Depends(get_canvas_service)) -> ModelConfig:
    return service.get_config()


@router.post("/model-config", status_code=200, summary="Replace the model configuration")
async def update_model_config(
    config: ModelConfig,
    service: CanvasService = Depends(get_canvas_service),
) -> Response:
    service.update_config(config)
    return Response(status_code=200)
