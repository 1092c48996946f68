"""
Augmented Canvas Backend — Prompt Route Handler
================================================

What:  POST /api/prompt, free-form completion for one node or several nodes.
How:   FastAPI validates the body as either request shape; CanvasService
       normalizes it, selects the agent and completes.
Who:   Called by the canvas plugin's "Ask AI" and multi-node prompt actions.

Request Flow:
    1. Body validated as MultiNodeRequest | SingleNodeRequest
    2. Per-call key read from X-OpenAI-Key (empty → absent)
    3. CanvasService.handle_prompt() → {"response": "..."}
    4. On failure: 500 with {"response": "Error: <classified message>", ...}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from augmented_canvas.routes.deps import (
    classified_error_response,
    get_api_key,
    get_canvas_service,
)
from augmented_canvas.schemas.canvas import PromptRequest, PromptResponse
from augmented_canvas.services.canvas_service import CanvasService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Prompt"])


@router.post(
    "/prompt",
    response_model=PromptResponse,
    summary="Generate a free-form response for canvas content",
)
async def handle_prompt(
    request: PromptRequest,
    api_key: Optional[str] = Depends(get_api_key),
    service: CanvasService = Depends(get_canvas_service),
):
    try:
        response = await service.handle_prompt(request, api_key)
    except Exception as e:
        return classified_error_response(
            e, "response", lambda message: {"response": f"Error: {message}"}
        )
    return PromptResponse(response=response)
