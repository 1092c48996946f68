"""
Augmented Canvas Backend — OpenAI-Compatible Completion Agent
==============================================================

What:  Concrete CompletionAgent backed by the OpenAI Python SDK.
How:   Holds an AsyncOpenAI client built from the resolved credential (and the
       configured base URL for OpenAI-compatible endpoints) and sends one
       chat.completions request per complete() call.
Who:   Constructed by AgentFactory; called by CanvasService.

Request shape:
    messages = [{"role": "system", "content": <system prompt>}]   (if bound)
             + [{"role": "user", "content": <text>}]

No retries and no timeouts are layered on top of the SDK: the call is
attempted once and any SDK failure becomes a ProviderCallError carrying the
provider's own message.
"""

import logging
import time
import uuid
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from augmented_canvas.exceptions import ProviderCallError
from augmented_canvas.services.llm_base import CompletionAgent

logger = logging.getLogger(__name__)


class OpenAIAgent(CompletionAgent):
    """
    OpenAI chat-completions agent.

    The client object is owned by this agent; agents built per call are
    discarded together with their client once the call returns.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        system_prompt: Optional[str] = None,
    ):
        self._client = client
        self._model_name = model_name
        self._system_prompt = system_prompt

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def system_prompt(self) -> Optional[str]:
        return self._system_prompt

    def _build_messages(self, text: str) -> List[Dict[str, Any]]:
        messages: List[Dict[str, Any]] = []
        if self._system_prompt is not None:
            messages.append({"role": "system", "content": self._system_prompt})
        messages.append({"role": "user", "content": text})
        return messages

    async def complete(self, text: str) -> str:
        """
        Send `text` to the bound model and return the answer text.

        Flow:
            1. Build the message list (system prompt first, when bound)
            2. Await chat.completions.create()
            3. Return choices[0].message.content ("" when absent)

        Raises:
            ProviderCallError: Any OpenAIError raised by the SDK.
        """
        call_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        logger.info(
            "[%s] Starting completion: model=%s, system_prompt=%s, %d chars",
            call_id,
            self._model_name,
            "yes" if self._system_prompt is not None else "no",
            len(text),
        )

        try:
            response = await self._client.chat.completions.create(
                model=self._model_name,
                messages=self._build_messages(text),
            )
        except OpenAIError as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "[%s] Completion failed after %.0fms: %s",
                call_id,
                duration_ms,
                str(e),
            )
            raise ProviderCallError(
                message=str(e),
                context={"call_id": call_id, "error_type": type(e).__name__},
            ) from e

        duration_ms = (time.time() - start_time) * 1000

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        logger.info(
            "[%s] Completion finished in %.0fms, %d chars",
            call_id,
            duration_ms,
            len(content),
        )
        return content
