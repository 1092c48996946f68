"""
Augmented Canvas Backend — Route Dependencies
==============================================

What:  FastAPI dependencies shared by the route modules, plus the helper that
       renders a ClassifiedError into an endpoint's own response shape.
Why:   The plugin decodes every response with the success schema, so errors
       must arrive in that same shape (with the message in the text field)
       rather than as a generic {"detail": ...} body.
"""

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from augmented_canvas.config import settings
from augmented_canvas.middleware.request_id import request_id_var
from augmented_canvas.services.canvas_service import CanvasService
from augmented_canvas.services.error_classifier import ClassifiedError, classify

logger = logging.getLogger(__name__)


def get_canvas_service(request: Request) -> CanvasService:
    """The CanvasService built at startup (or injected by create_app)."""
    return request.app.state.canvas_service


def get_api_key(request: Request) -> Optional[str]:
    """
    Per-call credential from the X-OpenAI-Key header.

    The plugin always sends the header; an empty value means "not provided".
    """
    value = request.headers.get(settings.api_key_header)
    return value or None


def classified_error_response(
    exc: Exception,
    operation: str,
    render: Callable[[str], Dict[str, Any]],
) -> JSONResponse:
    """
    Classify `exc` and return a 500 response.

    Args:
        exc:       The failure raised by CanvasService.
        operation: Short label for the log line ("prompt", "questions", ...).
        render:    Builds the endpoint's response shape from the classified
                   message; `error` (kind) and `request_id` are added to it.
    """
    rid = request_id_var.get("")
    classified: ClassifiedError = classify(exc)
    logger.error(
        "[%s] Error generating %s (%s): %s",
        rid,
        operation,
        classified.kind.value,
        str(exc),
    )
    content = render(classified.message)
    content["error"] = classified.kind.value
    content["request_id"] = rid
    return JSONResponse(status_code=500, content=content)
