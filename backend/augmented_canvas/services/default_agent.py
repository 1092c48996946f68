"""
Augmented Canvas Backend — Default Agent Holder
================================================

What:  The one long-lived agent, built at startup from the environment
       credential and shared read-only by every call that supplies neither a
       system prompt nor a per-call credential.

Lifecycle:
    build()    Once, at process start. A MissingCredentialError leaves the
               holder empty so the process still starts; any other failure
               propagates and aborts startup.
    get()      Returns the agent or None. Callers turn None into
               MissingCredentialError at call time.
    rebuild()  Explicit, opt-in re-resolution against the latest ConfigStore
               value. Nothing calls it automatically on config changes.

Why two locks:
    _rebuild_lock  serializes whole rebuilds, so two rebuilds racing on a
                   config change cannot finish out of order
    _lock          guards only the swap, so get() never waits on construction
"""

import logging
import threading
from typing import Optional

from augmented_canvas.exceptions import MissingCredentialError
from augmented_canvas.services.agent_factory import AgentFactory
from augmented_canvas.services.config_store import ConfigStore
from augmented_canvas.services.credentials import CredentialResolver
from augmented_canvas.services.llm_base import CompletionAgent

logger = logging.getLogger(__name__)


class DefaultAgentHolder:
    """Explicit optional default agent with an explicit rebuild operation."""

    def __init__(
        self,
        config_store: ConfigStore,
        resolver: CredentialResolver,
        factory: AgentFactory,
    ):
        self._config_store = config_store
        self._resolver = resolver
        self._factory = factory
        self._agent: Optional[CompletionAgent] = None
        self._lock = threading.Lock()
        # Held across a whole rebuild; _lock only guards the swap
        self._rebuild_lock = threading.Lock()

    @classmethod
    def build(
        cls,
        config_store: ConfigStore,
        resolver: CredentialResolver,
        factory: AgentFactory,
    ) -> "DefaultAgentHolder":
        """Create the holder and construct the default agent once."""
        holder = cls(config_store, resolver, factory)
        holder.rebuild()
        return holder

    def _construct(self) -> Optional[CompletionAgent]:
        config = self._config_store.get()
        try:
            credential = self._resolver.resolve(None, config)
        except MissingCredentialError:
            logger.warning(
                "No credential found in %s; default agent is absent. "
                "Requests must supply an API key until one is configured.",
                config.api_key_env or "<no environment variable configured>",
            )
            return None
        return self._factory.build(config, credential)

    def rebuild(self) -> None:
        """
        Re-resolve the environment credential against the current config and
        replace the held agent.

        Concurrent rebuilds are serialized end to end (config read, build,
        swap): an older config can never overwrite an agent built from a
        newer one.
        Readers only wait for the swap, never for construction.

        Raises:
            ProviderCallError: Agent construction failed for a reason other
                than a missing credential. The previously held agent is kept.
        """
        with self._rebuild_lock:
            agent = self._construct()
            with self._lock:
                self._agent = agent
        if agent is not None:
            logger.info("Default agent ready (model=%s)", agent.model_name)

    def get(self) -> Optional[CompletionAgent]:
        with self._lock:
            return self._agent

    @property
    def available(self) -> bool:
        return self.get() is not None
