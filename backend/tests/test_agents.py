"""
Augmented Canvas Backend — Agent Construction and Completion Tests
===================================================================

What:  Tests for AgentFactory and OpenAIAgent with a mocked OpenAI client.

What we test:
    ✅ OpenAI provider builds an OpenAIAgent from credential + base URL
    ✅ System prompt is bound and sent first on every call
    ✅ Unknown providers are rejected at construction
    ✅ Client construction failures surface as ProviderCallError
    ✅ SDK call failures surface as ProviderCallError
    ❌ Real API calls
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from openai import OpenAIError

from augmented_canvas.exceptions import ProviderCallError, UnsupportedProviderError
from augmented_canvas.models import ModelConfig
from augmented_canvas.services.agent_factory import AgentFactory
from augmented_canvas.services.openai_agent import OpenAIAgent


def make_completion(content):
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


def make_client(content="answer"):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=make_completion(content))
    return client


class TestAgentFactory:

    def test_builds_openai_agent(self):
        with patch("augmented_canvas.services.agent_factory.AsyncOpenAI") as mock_client_cls:
            agent = AgentFactory().build(ModelConfig(), "sk-test")

        mock_client_cls.assert_called_once_with(api_key="sk-test", base_url=None)
        assert isinstance(agent, OpenAIAgent)
        assert agent.model_name == "o3-mini"
        assert agent.system_prompt is None

    def test_passes_base_url_and_system_prompt(self):
        config = ModelConfig(model_name="local-model", base_url="http://localhost:8080/v1")
        with patch("augmented_canvas.services.agent_factory.AsyncOpenAI") as mock_client_cls:
            agent = AgentFactory().build(config, "sk-test", "Be brief.")

        mock_client_cls.assert_called_once_with(
            api_key="sk-test", base_url="http://localhost:8080/v1"
        )
        assert agent.model_name == "local-model"
        assert agent.system_prompt == "Be brief."

    def test_builds_real_client_without_network(self):
        agent = AgentFactory().build(ModelConfig(), "sk-test")
        assert isinstance(agent, OpenAIAgent)

    def test_unknown_provider_rejected(self):
        with pytest.raises(UnsupportedProviderError) as exc_info:
            AgentFactory().build(ModelConfig(provider="Anthropic"), "sk-test")
        assert isinstance(exc_info.value, ProviderCallError)
        assert "Anthropic" in exc_info.value.message

    def test_construction_failure_is_provider_error(self):
        with patch(
            "augmented_canvas.services.agent_factory.AsyncOpenAI",
            side_effect=ValueError("invalid base url"),
        ):
            with pytest.raises(ProviderCallError, match="invalid base url"):
                AgentFactory().build(ModelConfig(base_url="::bad::"), "sk-test")


class TestOpenAIAgent:

    @pytest.mark.asyncio
    async def test_complete_without_system_prompt(self):
        client = make_client("Hello")
        agent = OpenAIAgent(client, "o3-mini")

        result = await agent.complete("Summarize X")

        assert result == "Hello"
        client.chat.completions.create.assert_awaited_once_with(
            model="o3-mini",
            messages=[{"role": "user", "content": "Summarize X"}],
        )

    @pytest.mark.asyncio
    async def test_system_prompt_sent_first_on_every_call(self):
        client = make_client("ok")
        agent = OpenAIAgent(client, "o3-mini", "Respond in markdown.")

        await agent.complete("first")
        await agent.complete("second")

        for call, text in zip(client.chat.completions.create.await_args_list, ["first", "second"]):
            assert call.kwargs["messages"] == [
                {"role": "system", "content": "Respond in markdown."},
                {"role": "user", "content": text},
            ]

    @pytest.mark.asyncio
    async def test_empty_content_returns_empty_string(self):
        agent = OpenAIAgent(make_client(None), "o3-mini")
        assert await agent.complete("anything") == ""

    @pytest.mark.asyncio
    async def test_sdk_failure_is_provider_error(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=OpenAIError("invalid_api_key"))
        agent = OpenAIAgent(client, "o3-mini")

        with pytest.raises(ProviderCallError, match="invalid_api_key"):
            await agent.complete("Summarize X")
