"""
Augmented Canvas Backend — Canvas Service (Response Synthesis)
===============================================================

What:  The shared core every adapter calls: picks the agent for a call,
       sends the prompt, and parses structured answers.
Why:   HTTP, plugin and worker must give identical answers for identical
       input, so all three call this one class and add only input
       validation and error rendering around it.
How:   Composes ConfigStore, CredentialResolver, AgentFactory and
       DefaultAgentHolder. Holds no per-call state.
Who:   HTTP routes, CanvasPluginModule and CanvasWorker.

Agent selection for generate():

    system prompt?  per-call key?   agent used
    ──────────────  ─────────────   ─────────────────────────────────────────
    yes             any             fresh agent bound to the system prompt
                                    (per-call key wins over environment)
    no              non-empty       fresh agent, no system prompt, that key
    no              absent/empty    DefaultAgentHolder; absent → MissingCredential

Structured endpoints wrap generate() with a fixed instruction template and
parse the raw answer strictly as JSON; a parse failure is a
MalformedModelOutputError, never a ProviderCallError.
"""

import logging
from typing import List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from augmented_canvas.exceptions import MalformedModelOutputError, MissingCredentialError
from augmented_canvas.models import Flashcard, FlashcardsOutput, ModelConfig, QuestionsOutput
from augmented_canvas.schemas.canvas import PromptRequest
from augmented_canvas.services.agent_factory import AgentFactory
from augmented_canvas.services.config_store import ConfigStore
from augmented_canvas.services.credentials import CredentialResolver
from augmented_canvas.services.default_agent import DefaultAgentHolder
from augmented_canvas.services.llm_base import CompletionAgent
from augmented_canvas.services.normalizer import normalize

logger = logging.getLogger(__name__)

DEFAULT_QUESTION_COUNT = 5
DEFAULT_FLASHCARD_SUBJECT = "this content"

QUESTIONS_TEMPLATE = (
    "Based on the following content, generate {count} thoughtful questions that "
    "would help someone understand the material better. Return the response as a "
    "JSON object with a 'questions' field containing an array of strings."
    "\n\nContent: {content}\n\nQuestions:"
)

FLASHCARDS_TEMPLATE = (
    "Create flashcards for studying {subject}. Each flashcard should have a "
    "question on the front and the answer on the back. Return the response as a "
    "JSON object with a 'filename' field containing a suggested filename (without "
    "extension) and a 'flashcards' field containing an array of objects, each with "
    "'front' and 'back' fields.\n\nContent: {content}\n\nFlashcards:"
)


class CanvasService:
    """
    Request-resolution and response-synthesis pipeline.

    Responsibilities:
        - generate():            free-form completion with agent selection
        - handle_prompt():       normalize a prompt request, then generate()
        - generate_questions():  study questions parsed from JSON
        - generate_flashcards(): flashcards parsed from JSON
        - get_config()/update_config(): pass-through to ConfigStore
    """

    def __init__(
        self,
        config_store: ConfigStore,
        resolver: CredentialResolver,
        factory: AgentFactory,
        default_agent: DefaultAgentHolder,
    ):
        self.config_store = config_store
        self.resolver = resolver
        self.factory = factory
        self.default_agent = default_agent

    @classmethod
    def create(
        cls,
        initial_config: Optional[ModelConfig] = None,
        resolver: Optional[CredentialResolver] = None,
        factory: Optional[AgentFactory] = None,
    ) -> "CanvasService":
        """
        Wire a service and build its default agent.

        Raises:
            ProviderCallError: The default agent could not be constructed for
                a reason other than a missing credential.
        """
        config_store = ConfigStore(initial_config)
        resolver = resolver or CredentialResolver()
        factory = factory or AgentFactory()
        default_agent = DefaultAgentHolder.build(config_store, resolver, factory)
        return cls(config_store, resolver, factory, default_agent)

    # ── Configuration ─────────────────────────────────────────────────────

    def get_config(self) -> ModelConfig:
        return self.config_store.get()

    def update_config(self, config: ModelConfig) -> None:
        self.config_store.replace(config)

    def has_api_key(self, per_call_credential: Optional[str] = None) -> bool:
        """True when a call without a system prompt would find a credential."""
        return self.resolver.has_credential(per_call_credential, self.config_store.get())

    # ── Free-form Completion ──────────────────────────────────────────────

    def _select_agent(
        self,
        system_prompt: Optional[str],
        per_call_credential: Optional[str],
    ) -> CompletionAgent:
        if system_prompt is not None or per_call_credential:
            config = self.config_store.get()
            credential = self.resolver.resolve(per_call_credential, config)
            return self.factory.build(config, credential, system_prompt)

        agent = self.default_agent.get()
        if agent is None:
            raise MissingCredentialError(api_key_env=self.config_store.get().api_key_env)
        return agent

    async def generate(
        self,
        prompt_text: str,
        system_prompt: Optional[str] = None,
        per_call_credential: Optional[str] = None,
    ) -> str:
        """
        Produce a completion for `prompt_text`.

        Raises:
            MissingCredentialError: No credential from any source.
            ProviderCallError: Agent construction or the provider call failed.
        """
        agent = self._select_agent(system_prompt, per_call_credential)
        return await agent.complete(prompt_text)

    async def handle_prompt(
        self,
        request: PromptRequest,
        per_call_credential: Optional[str] = None,
    ) -> str:
        prompt_text, system_prompt = normalize(request)
        return await self.generate(prompt_text, system_prompt, per_call_credential)

    # ── Structured Results ────────────────────────────────────────────────

    async def generate_questions(
        self,
        content: str,
        count: int = DEFAULT_QUESTION_COUNT,
        per_call_credential: Optional[str] = None,
    ) -> List[str]:
        """
        Generate `count` study questions about `content`.

        `count` is embedded verbatim in the instruction (0 included).

        Raises:
            MalformedModelOutputError: The answer is not {"questions": [str]}.
        """
        prompt = QUESTIONS_TEMPLATE.format(count=count, content=content)
        raw = await self.generate(prompt, None, per_call_credential)

        try:
            output = QuestionsOutput.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("Model returned unparseable questions output: %s", e)
            raise MalformedModelOutputError(
                message=f"Failed to parse questions response: {e}",
                raw_output=raw,
            ) from e

        return output.questions

    async def generate_flashcards(
        self,
        content: str,
        title: Optional[str] = None,
        per_call_credential: Optional[str] = None,
    ) -> Tuple[str, List[Flashcard]]:
        """
        Generate flashcards for `content`.

        Returns:
            (suggested filename without extension, flashcards in model order)

        Raises:
            MalformedModelOutputError: The answer is not
                {"filename": str, "flashcards": [{"front": str, "back": str}]}.
        """
        subject = title if title is not None else DEFAULT_FLASHCARD_SUBJECT
        prompt = FLASHCARDS_TEMPLATE.format(subject=subject, content=content)
        raw = await self.generate(prompt, None, per_call_credential)

        try:
            output = FlashcardsOutput.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("Model returned unparseable flashcards output: %s", e)
            raise MalformedModelOutputError(
                message=f"Failed to parse flashcards response: {e}",
                raw_output=raw,
            ) from e

        return output.filename, output.flashcards
