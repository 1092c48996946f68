"""
Augmented Canvas Backend — Domain Models
=========================================

What:  Pydantic models for the model configuration and the structured results
       parsed out of model output.
Who:   ModelConfig is held by ConfigStore and read by CredentialResolver and
       AgentFactory; QuestionsOutput/FlashcardsOutput are produced by
       CanvasService when parsing the model's JSON answer.

Wire format:
    ModelConfig serializes exactly as the canvas plugin expects:
        {"provider": "OpenAI", "model_name": "o3-mini",
         "api_key_env": "OPENAI_API_KEY", "base_url": null}
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModelProvider(str, Enum):
    """Providers AgentFactory knows how to build an agent for."""

    OPENAI = "OpenAI"


class ModelConfig(BaseModel):
    """
    Model configuration for every completion call.

    Immutable: the ConfigStore replaces it wholesale, never field by field.

    `provider` is kept as a plain string so that storing a config never fails
    on an unknown provider; AgentFactory rejects it when an agent is built.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    provider: str = Field(default=ModelProvider.OPENAI.value)
    model_name: str = Field(default="o3-mini")
    api_key_env: Optional[str] = Field(
        default="OPENAI_API_KEY",
        description="Name of the environment variable holding the credential",
    )
    base_url: Optional[str] = Field(default=None)


class Flashcard(BaseModel):
    """A single flashcard: question on the front, answer on the back."""

    model_config = ConfigDict(extra="forbid", strict=True)

    front: str
    back: str


class QuestionsOutput(BaseModel):
    """Shape the model must answer with for question generation."""

    model_config = ConfigDict(extra="forbid", strict=True)

    questions: List[str]


class FlashcardsOutput(BaseModel):
    """Shape the model must answer with for flashcard generation."""

    model_config = ConfigDict(extra="forbid", strict=True)

    filename: str
    flashcards: List[Flashcard]
