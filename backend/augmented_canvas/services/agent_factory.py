"""
Augmented Canvas Backend — Agent Factory
=========================================

What:  Builds a CompletionAgent bound to a resolved credential, the configured
       model and an optional system prompt.
How:   Pure construction. Dispatches on ModelConfig.provider; the only
       supported path builds an AsyncOpenAI client and wraps it in an
       OpenAIAgent. Nothing is cached: each build() returns a new agent.
Who:   Called by CanvasService for per-call agents and by DefaultAgentHolder.

Failure mapping:
    unknown provider                 → UnsupportedProviderError (ProviderCall)
    client construction raised       → ProviderCallError
"""

import logging
from typing import Optional

from openai import AsyncOpenAI

from augmented_canvas.exceptions import ProviderCallError, UnsupportedProviderError
from augmented_canvas.models import ModelConfig, ModelProvider
from augmented_canvas.services.llm_base import CompletionAgent
from augmented_canvas.services.openai_agent import OpenAIAgent

logger = logging.getLogger(__name__)


class AgentFactory:
    """Stateless builder of completion agents."""

    def build(
        self,
        config: ModelConfig,
        credential: str,
        system_prompt: Optional[str] = None,
    ) -> CompletionAgent:
        """
        Build an agent for `config.model_name`.

        Args:
            config:        Model configuration to bind.
            credential:    Resolved, non-empty provider credential.
            system_prompt: Standing instruction sent ahead of every call made
                           through the returned agent.

        Raises:
            UnsupportedProviderError: `config.provider` has no build path.
            ProviderCallError: The provider client could not be constructed.
        """
        if config.provider == ModelProvider.OPENAI.value:
            return self._build_openai(config, credential, system_prompt)
        raise UnsupportedProviderError(provider=config.provider)

    def _build_openai(
        self,
        config: ModelConfig,
        credential: str,
        system_prompt: Optional[str],
    ) -> OpenAIAgent:
        try:
            client = AsyncOpenAI(api_key=credential, base_url=config.base_url)
        except Exception as e:
            logger.error(
                "Failed to construct OpenAI client (model=%s, base_url=%s): %s",
                config.model_name,
                config.base_url or "default",
                str(e),
            )
            raise ProviderCallError(
                message=str(e),
                context={"provider": config.provider, "error_type": type(e).__name__},
            ) from e

        logger.debug(
            "Built agent: model=%s, base_url=%s, system_prompt=%s",
            config.model_name,
            config.base_url or "default",
            "yes" if system_prompt is not None else "no",
        )
        return OpenAIAgent(client, config.model_name, system_prompt)
