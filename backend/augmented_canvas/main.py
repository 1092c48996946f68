"""
Augmented Canvas Backend — FastAPI Application Factory
=======================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn augmented_canvas.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  POST /api/prompt      POST /api/questions          │
    │  POST /api/flashcards  GET|POST /api/model-config   │
    │  GET  /health                                       │
    │                                                     │
    │  app.state.canvas_service: shared CanvasService     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the CanvasService (and its default agent) unless one was injected
    3. Log whether an environment credential was found
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from augmented_canvas import __version__
from augmented_canvas.config import settings
from augmented_canvas.exceptions import CanvasError
from augmented_canvas.middleware.logging import RequestLoggingMiddleware
from augmented_canvas.middleware.request_id import RequestIDMiddleware, request_id_var
from augmented_canvas.models import ModelConfig
from augmented_canvas.routes import health, model_config, prompt, study
from augmented_canvas.services.canvas_service import CanvasService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The SDK's HTTP stack logs every request at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def initial_model_config() -> ModelConfig:
    """The ModelConfig the process starts with, seeded from Settings."""
    return ModelConfig(
        model_name=settings.default_model_name,
        api_key_env=settings.default_api_key_env,
        base_url=settings.default_base_url,
    )


def build_canvas_service() -> CanvasService:
    """
    Build the shared CanvasService.

    A missing environment credential is not fatal: the server starts and
    requests must carry their own key. Any other failure to build the
    default agent propagates and aborts startup.
    """
    service = CanvasService.create(initial_config=initial_model_config())
    if not service.has_api_key():
        env_name = service.get_config().api_key_env
        logger.warning(
            "No OpenAI API key found in environment. The server will start, but "
            "you'll need to provide an API key in the plugin settings."
        )
        if env_name:
            logger.warning(
                "You can also set the %s environment variable before starting the backend.",
                env_name,
            )
    return service


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Augmented Canvas Backend %s starting up...", __version__)

    if getattr(app.state, "canvas_service", None) is None:
        app.state.canvas_service = build_canvas_service()

    logger.info("Listening on http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Augmented Canvas Backend shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global handlers for errors that escape the route handlers.

    Core failures are classified inside the routes and rendered in each
    endpoint's own response shape; these handlers only cover the rest.
    """

    @app.exception_handler(CanvasError)
    async def handle_canvas_error(request: Request, exc: CanvasError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "canvas_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(canvas_service: Optional[CanvasService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        canvas_service: Pre-built service to serve. When omitted the service
                        is built during startup from the process environment.
    """
    app = FastAPI(
        title="Augmented Canvas API",
        description=(
            "Local backend for the augmented canvas plugin: free-form responses, "
            "study questions and flashcards from note content."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.canvas_service = canvas_service

    # Middleware executes in reverse order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(prompt.router)
    app.include_router(study.router)
    app.include_router(model_config.router)
    app.include_router(health.router)

    return app


app = create_app()
