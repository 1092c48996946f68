"""
Augmented Canvas Backend — Study Material Route Handlers
=========================================================

What:  POST /api/questions and POST /api/flashcards.
How:   Delegates to CanvasService, which parses the model's JSON answer.
Who:   Called by the canvas plugin's "Generate questions" and
       "Create flashcards" actions.

Error bodies keep each endpoint's success shape so the plugin can always
decode them:
    questions:   {"questions": ["Error: <message>"], "error": ..., "request_id": ...}
    flashcards:  {"filename": "error: <message>", "flashcards": [], ...}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from augmented_canvas.routes.deps import (
    classified_error_response,
    get_api_key,
    get_canvas_service,
)
from augmented_canvas.schemas.canvas import (
    FlashcardsRequest,
    FlashcardsResponse,
    QuestionsRequest,
    QuestionsResponse,
)
from augmented_canvas.services.canvas_service import DEFAULT_QUESTION_COUNT, CanvasService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Study"])


@router.post(
    "/questions",
    response_model=QuestionsResponse,
    summary="Generate study questions about content",
)
async def handle_questions(
    request: QuestionsRequest,
    api_key: Optional[str] = Depends(get_api_key),
    service: CanvasService = Depends(get_canvas_service),
):
    count = request.count if request.count is not None else DEFAULT_QUESTION_COUNT
    try:
        questions = await service.generate_questions(request.content, count, api_key)
    except Exception as e:
        return classified_error_response(
            e, "questions", lambda message: {"questions": [f"Error: {message}"]}
        )
    return QuestionsResponse(questions=questions)


@router.post(
    "/flashcards",
    response_model=FlashcardsResponse,
    summary="Generate flashcards and a suggested filename",
)
async def handle_flashcards(
    request: FlashcardsRequest,
    api_key: Optional[str] = Depends(get_api_key),
    service: CanvasService = Depends(get_canvas_service),
):
    try:
        filename, flashcards = await service.generate_flashcards(
            request.content, request.title, api_key
        )
    except Exception as e:
        return classified_error_response(
            e,
            "flashcards",
            lambda message: {"filename": f"error: {message}", "flashcards": []},
        )
    return FlashcardsResponse(filename=filename, flashcards=flashcards)
