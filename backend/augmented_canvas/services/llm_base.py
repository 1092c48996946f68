"""
Augmented Canvas Backend — Abstract Completion Agent Interface
===============================================================

What:  Abstract base class for a "produce completion for text" capability.
How:   Concrete agents (OpenAIAgent) inherit from CompletionAgent and
       implement complete(). AgentFactory is the only place that constructs
       them; CanvasService only ever sees this interface.
Who:   Called by CanvasService.generate().

An agent is an immutable binding of (model config, credential, optional
system prompt). It never keeps conversation history: every complete() call is
a single-turn request made from the bound values and the given text alone.
"""

from abc import ABC, abstractmethod
from typing import Optional


class CompletionAgent(ABC):
    """
    Abstract interface for a bound completion agent.

    Contract:
        - complete() sends the bound system prompt (if any) followed by the
          given text and returns the model's raw text answer
        - Provider and transport failures are raised as ProviderCallError
        - Cancellation of the awaiting task is never swallowed
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier this agent sends requests to."""
        ...

    @property
    @abstractmethod
    def system_prompt(self) -> Optional[str]:
        """Standing instruction bound at construction, or None."""
        ...

    @abstractmethod
    async def complete(self, text: str) -> str:
        """
        Produce a completion for `text`.

        Returns:
            str: The model's raw answer. Empty string when the provider
                 returned no content.

        Raises:
            ProviderCallError: The provider rejected the call or the
                transport to it failed.
        """
        ...
