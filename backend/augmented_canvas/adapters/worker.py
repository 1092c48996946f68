"""
Augmented Canvas Backend — Background Worker Module
====================================================

What:  Message-driven adapter: consumes request dicts from a queue and
       produces reply dicts, for hosts that run generation off their main
       thread.
Why:   A worker host cannot catch exceptions across the message boundary, so
       every message must end in exactly one reply, including messages the
       worker cannot make sense of.
How:   Delegates every message to a CanvasPluginModule, so validation,
       resolution, normalization and classification are exactly the plugin's
       (and therefore the HTTP service's).

Message protocol:
    in:   {"id": <any>, "type": "response",      "api_key"?: str, "content": str, "system_prompt"?: str}
          {"id": <any>, "type": "prompt",        "api_key"?: str, "request": {...}}
          {"id": <any>, "type": "questions",     "api_key"?: str, "content": str, "count"?: int}
          {"id": <any>, "type": "flashcards",    "api_key"?: str, "content": str, "title"?: str}
          {"id": <any>, "type": "get_config"}
          {"id": <any>, "type": "update_config", "config": {...}}
    out:  {"id": <same>, "ok": true,  "result": <payload>}
          {"id": <same>, "ok": false, "error": {"kind": str, "message": str}}

    `kind` is MissingCredential, ProviderCall or MalformedModelOutput for core
    failures, and InvalidRequest for a message the worker cannot interpret:
    not a dict, unknown type, missing or mistyped fields, invalid config.
    A message that is not a dict has no id to echo; its reply carries id None.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Set

from augmented_canvas.adapters.plugin import CanvasPluginModule, ClassifiedFailure
from augmented_canvas.exceptions import ConfigError, InvalidRequestError
from augmented_canvas.services.canvas_service import CanvasService

logger = logging.getLogger(__name__)

INVALID_REQUEST = "InvalidRequest"


class CanvasWorker:
    """Answers worker messages; every call is independent."""

    def __init__(
        self,
        service: Optional[CanvasService] = None,
        module: Optional[CanvasPluginModule] = None,
    ):
        self.module = module if module is not None else CanvasPluginModule(service)

    async def handle_message(self, message: Any) -> Dict[str, Any]:
        """
        Answer one message. Never raises for bad input: anything the worker
        cannot interpret becomes an InvalidRequest reply.
        """
        message_id = message.get("id") if isinstance(message, dict) else None
        try:
            if not isinstance(message, dict):
                raise InvalidRequestError(
                    message=f"Worker message must be an object, got {type(message).__name__}"
                )
            result = await self._dispatch(message)
        except ClassifiedFailure as e:
            return self._error(message_id, e.classified.kind.value, e.classified.message)
        except (InvalidRequestError, ConfigError) as e:
            logger.warning("Rejected worker message %r: %s", message_id, e.message)
            return self._error(message_id, INVALID_REQUEST, e.message)
        return {"id": message_id, "ok": True, "result": result}

    async def _dispatch(self, message: Dict[str, Any]) -> Any:
        kind = message.get("type")
        api_key = message.get("api_key")
        if api_key is not None and not isinstance(api_key, str):
            raise InvalidRequestError(message="'api_key' must be a string")

        if kind == "response":
            return {
                "response": await self.module.generate_response(
                    message.get("content"), message.get("system_prompt"), api_key
                )
            }

        if kind == "prompt":
            request = message.get("request")
            if not isinstance(request, dict):
                raise InvalidRequestError(message="Prompt message needs a 'request' object")
            return await self.module.handle_prompt(api_key, request)

        if kind == "questions":
            return {
                "questions": await self.module.generate_questions(
                    message.get("content"), message.get("count"), api_key
                )
            }

        if kind == "flashcards":
            return await self.module.generate_flashcards(
                message.get("content"), message.get("title"), api_key
            )

        if kind == "get_config":
            return self.module.get_config()

        if kind == "update_config":
            # Validated as a mapping; no JSON round trip for undecodable values
            self.module.replace_model_config(message.get("config"))
            return None

        raise InvalidRequestError(message=f"Unknown message type: {kind!r}")

    @staticmethod
    def _error(message_id: Any, kind: str, text: str) -> Dict[str, Any]:
        return {"id": message_id, "ok": False, "error": {"kind": kind, "message": text}}

    async def run(
        self,
        inbox: "asyncio.Queue[Any]",
        outbox: "asyncio.Queue[Dict[str, Any]]",
    ) -> None:
        """
        Serve messages from `inbox` until a None sentinel arrives.

        Each message is handled in its own task so a slow completion never
        holds up the next message. In-flight messages are finished before
        run() returns; replies arrive in completion order.
        """
        pending: Set[asyncio.Task] = set()

        async def answer(message: Any) -> None:
            await outbox.put(await self.handle_message(message))

        while True:
            message = await inbox.get()
            if message is None:
                break
            task = asyncio.create_task(answer(message))
            pending.add(task)
            task.add_done_callback(pending.discard)

        if pending:
            await asyncio.gather(*pending)
        logger.info("Worker inbox closed")
