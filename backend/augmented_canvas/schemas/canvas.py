"""
Augmented Canvas Backend — Pydantic Request/Response Schemas
=============================================================

What:  Pydantic models defining the contract between the canvas plugin and
       the backend (HTTP body, plugin-module dicts, worker messages).
How:   FastAPI validates request bodies against these models and serializes
       responses from them; the plugin and worker adapters validate their
       dict payloads with the same models.

Request shapes:
    Prompt (single node):   {"content": "...", "system_prompt": "..."?}
    Prompt (multi node):    {"nodes": [{"id": "...", "content": "..."}],
                             "prompt": "...", "system_prompt": "..."?}
    Questions:              {"content": "...", "count": 5?}
    Flashcards:             {"content": "...", "title": "..."?}
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from augmented_canvas.models import Flashcard


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NodeContent(BaseModel):
    """One canvas node. `id` is carried for traceability only."""

    id: str
    content: str


class SingleNodeRequest(BaseModel):
    """Prompt built from a single node's text, sent unchanged."""

    model_config = ConfigDict(extra="forbid")

    content: str
    system_prompt: Optional[str] = None


class MultiNodeRequest(BaseModel):
    """
    Prompt built from several nodes plus a user instruction.

    The wire field is `prompt`; it is exposed as `instruction` in code.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    nodes: List[NodeContent]
    instruction: str = Field(alias="prompt")
    system_prompt: Optional[str] = None


PromptRequest = Union[MultiNodeRequest, SingleNodeRequest]

prompt_request_adapter: TypeAdapter[PromptRequest] = TypeAdapter(PromptRequest)


class QuestionsRequest(BaseModel):
    content: str
    count: Optional[int] = Field(default=None, ge=0)


class FlashcardsRequest(BaseModel):
    content: str
    title: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PromptResponse(BaseModel):
    response: str


class QuestionsResponse(BaseModel):
    questions: List[str]


class FlashcardsResponse(BaseModel):
    filename: str
    flashcards: List[Flashcard]


class HealthResponse(BaseModel):
    """
    Health check response.

    `default_agent` is "ready" when an environment credential was found at
    startup, "absent" when requests must carry their own key.
    """

    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    default_agent: str = Field(description="Default agent state: ready, absent")
    uptime_seconds: float = Field(description="Seconds since service started")
