"""
Augmented Canvas Backend — In-Process Plugin Module
====================================================

What:  The plugin-facing module: config getters/setters and awaitable
       response/prompt/questions/flashcards calls, without an HTTP hop.
Why:   Hosts that can run the core in-process skip the local server, but the
       user must see exactly the same answers and errors as over HTTP.
How:   Thin adapter over CanvasService. Payloads arrive as plain arguments,
       dicts or JSON strings and are validated with the same schemas the HTTP
       routes use (SingleNodeRequest, QuestionsRequest, FlashcardsRequest, the
       prompt union); core failures are raised as ClassifiedFailure carrying
       the ClassifiedError.
Who:   Loaded by a host plugin runtime through onload(host); also the
       delegate behind CanvasWorker.

Failure channels:
    ConfigError          config payload is not a ModelConfig
    InvalidRequestError  call arguments match no request schema
                         (e.g. count=-3 or count="five", same as HTTP 422)
    ClassifiedFailure    the core ran and failed (MissingCredential,
                         ProviderCall, MalformedModelOutput)

Host runtime:
    The host is anything implementing HostRuntime (add_command + notice).
    onload() registers one command whose callback shows a notice; the host
    owns the UI lifecycle.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from augmented_canvas.exceptions import CanvasError, ConfigError, InvalidRequestError
from augmented_canvas.models import ModelConfig
from augmented_canvas.schemas.canvas import (
    FlashcardsRequest,
    QuestionsRequest,
    SingleNodeRequest,
    prompt_request_adapter,
)
from augmented_canvas.services.canvas_service import DEFAULT_QUESTION_COUNT, CanvasService
from augmented_canvas.services.error_classifier import ClassifiedError, classify

logger = logging.getLogger(__name__)

RequestModel = TypeVar("RequestModel", bound=BaseModel)

COMMAND_ID = "augmented-canvas-example"
COMMAND_NAME = "Augmented Canvas Example Command"
COMMAND_NOTICE = "Hello from Augmented Canvas!"


class ClassifiedFailure(CanvasError):
    """A core failure after classification; `classified` is what callers show."""

    def __init__(self, classified: ClassifiedError):
        super().__init__(message=classified.message, context={"kind": classified.kind.value})
        self.classified = classified


@dataclass
class PluginCommand:
    id: str
    name: str
    callback: Callable[[], None] = field(repr=False)


class HostRuntime(Protocol):
    def add_command(self, command: PluginCommand) -> None: ...

    def notice(self, message: str) -> None: ...


class CanvasPluginModule:
    """
    Plugin-side entry point with the same semantics as the HTTP service.

    Args:
        service: Shared core. Built from the process environment when omitted.
    """

    def __init__(self, service: Optional[CanvasService] = None):
        self.service = service if service is not None else CanvasService.create()

    # ── Configuration ─────────────────────────────────────────────────────

    def get_config(self) -> Dict[str, Any]:
        return self.service.get_config().model_dump()

    def update_model_config(self, config_json: str) -> None:
        """
        Replace the model configuration from a JSON document.

        Raises:
            ConfigError: `config_json` is not a valid ModelConfig document.
        """
        try:
            config = ModelConfig.model_validate_json(config_json)
        except PydanticValidationError as e:
            raise ConfigError(message=f"Invalid model configuration: {e}") from e
        self.service.update_config(config)

    def replace_model_config(self, config: Any) -> None:
        """
        Replace the model configuration from an already-decoded mapping.

        Raises:
            ConfigError: `config` is not a mapping with valid ModelConfig fields.
        """
        try:
            parsed = ModelConfig.model_validate(config)
        except PydanticValidationError as e:
            raise ConfigError(message=f"Invalid model configuration: {e}") from e
        self.service.update_config(parsed)

    def has_api_key(self, api_key: Optional[str] = None) -> bool:
        return self.service.has_api_key(api_key)

    # ── Generation ────────────────────────────────────────────────────────

    async def generate_response(
        self,
        content: str,
        system_prompt: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> str:
        """
        Free-form completion for raw text.

        Same agent selection as a single-node prompt: a system prompt or a
        non-empty key gets a fresh agent, otherwise the default agent answers.

        Raises:
            InvalidRequestError: `content`/`system_prompt` are not strings.
            ClassifiedFailure: The core call failed.
        """
        request = self._parse(
            SingleNodeRequest,
            {"content": content, "system_prompt": system_prompt},
            "response",
        )
        try:
            return await self.service.generate(request.content, request.system_prompt, api_key)
        except Exception as e:
            raise self._classified(e, "response") from e

    async def handle_prompt(self, api_key: Optional[str], request: Dict[str, Any]) -> Dict[str, str]:
        """
        Run a single- or multi-node prompt request.

        Returns:
            {"response": <model answer>}

        Raises:
            InvalidRequestError: `request` matches neither request shape.
            ClassifiedFailure: The core call failed.
        """
        try:
            parsed = prompt_request_adapter.validate_python(request)
        except PydanticValidationError as e:
            raise InvalidRequestError(message=f"Invalid prompt request: {e}") from e

        try:
            response = await self.service.handle_prompt(parsed, api_key)
        except Exception as e:
            raise self._classified(e, "response") from e
        return {"response": response}

    async def generate_questions(
        self,
        content: str,
        count: Optional[int] = None,
        api_key: Optional[str] = None,
    ) -> List[str]:
        """
        Raises:
            InvalidRequestError: Negative or non-integer `count`, or
                non-string `content` (the HTTP route answers these with 422).
            ClassifiedFailure: The core call failed.
        """
        request = self._parse(QuestionsRequest, {"content": content, "count": count}, "questions")
        count = request.count if request.count is not None else DEFAULT_QUESTION_COUNT
        try:
            return await self.service.generate_questions(request.content, count, api_key)
        except Exception as e:
            raise self._classified(e, "questions") from e

    async def generate_flashcards(
        self,
        content: str,
        title: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Returns {"filename": ..., "flashcards": [{"front", "back"}, ...]}."""
        request = self._parse(FlashcardsRequest, {"content": content, "title": title}, "flashcards")
        try:
            filename, flashcards = await self.service.generate_flashcards(
                request.content, request.title, api_key
            )
        except Exception as e:
            raise self._classified(e, "flashcards") from e
        return {
            "filename": filename,
            "flashcards": [card.model_dump() for card in flashcards],
        }

    @staticmethod
    def _parse(model: Type[RequestModel], payload: Dict[str, Any], operation: str) -> RequestModel:
        # Same schemas as the HTTP bodies, so every surface accepts the same input
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise InvalidRequestError(message=f"Invalid {operation} request: {e}") from e

    @staticmethod
    def _classified(exc: Exception, operation: str) -> ClassifiedFailure:
        classified = classify(exc)
        logger.error("Error generating %s (%s): %s", operation, classified.kind.value, exc)
        return ClassifiedFailure(classified)


def onload(host: HostRuntime) -> PluginCommand:
    """Register the plugin's command with the host runtime."""
    command = PluginCommand(
        id=COMMAND_ID,
        name=COMMAND_NAME,
        callback=lambda: host.notice(COMMAND_NOTICE),
    )
    host.add_command(command)
    logger.info("Registered host command %s", command.id)
    return command
