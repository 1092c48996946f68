"""
Augmented Canvas Backend — Plugin Module Tests
===============================================

What:  CanvasPluginModule, the in-process adapter, and onload() command
       registration with a fake host runtime.

What we test:
    ✅ Same resolution/normalization semantics as the HTTP service
    ✅ Core failures raised as ClassifiedFailure with the classified kind
    ✅ Bad config JSON → ConfigError, bad prompt payload → InvalidRequestError
    ✅ questions/flashcards arguments validated like the HTTP bodies
    ✅ generate_response: raw text with optional system prompt and key
    ✅ onload registers one command whose callback shows a notice
"""

from typing import List

import pytest

from augmented_canvas.adapters.plugin import (
    COMMAND_ID,
    COMMAND_NAME,
    COMMAND_NOTICE,
    CanvasPluginModule,
    ClassifiedFailure,
    PluginCommand,
    onload,
)
from augmented_canvas.exceptions import ConfigError, InvalidRequestError
from augmented_canvas.services.error_classifier import ErrorKind


class FakeHost:
    def __init__(self):
        self.commands: List[PluginCommand] = []
        self.notices: List[str] = []

    def add_command(self, command: PluginCommand) -> None:
        self.commands.append(command)

    def notice(self, message: str) -> None:
        self.notices.append(message)


@pytest.fixture
def module(make_service, env_with_key):
    return CanvasPluginModule(make_service(env_with_key))


class TestConfig:

    def test_get_config_dict(self, module):
        assert module.get_config() == {
            "provider": "OpenAI",
            "model_name": "o3-mini",
            "api_key_env": "OPENAI_API_KEY",
            "base_url": None,
        }

    def test_update_from_json(self, module):
        module.update_model_config(
            '{"provider":"OpenAI","model_name":"gpt-4o","api_key_env":null,"base_url":null}'
        )
        assert module.get_config()["model_name"] == "gpt-4o"
        assert module.get_config()["api_key_env"] is None

    def test_invalid_json_rejected_and_config_kept(self, module):
        with pytest.raises(ConfigError):
            module.update_model_config("{not json")
        with pytest.raises(ConfigError):
            module.update_model_config('{"model_name": 42}')
        assert module.get_config()["model_name"] == "o3-mini"

    def test_has_api_key(self, module, make_service):
        assert module.has_api_key() is True
        bare = CanvasPluginModule(make_service({}))
        assert bare.has_api_key() is False
        assert bare.has_api_key("sk-call") is True


class TestGeneration:

    @pytest.mark.asyncio
    async def test_handle_prompt_multi_node(self, module, mock_agent):
        result = await module.handle_prompt(
            None,
            {"nodes": [{"id": "1", "content": "a"}], "prompt": "Explain"},
        )

        assert result == {"response": "model answer"}
        mock_agent.complete.assert_awaited_once_with("Node 1: a\n\nPrompt: Explain")

    @pytest.mark.asyncio
    async def test_handle_prompt_key_and_system_prompt(self, module, mock_factory):
        mock_factory.build.reset_mock()

        await module.handle_prompt("sk-call", {"content": "x", "system_prompt": "Be brief."})

        assert mock_factory.build.call_args.args[1:] == ("sk-call", "Be brief.")

    @pytest.mark.asyncio
    async def test_invalid_prompt_payload(self, module):
        with pytest.raises(InvalidRequestError):
            await module.handle_prompt(None, {"text": "no shape matches"})

    @pytest.mark.asyncio
    async def test_missing_credential_is_classified(self, make_service):
        bare = CanvasPluginModule(make_service({}))

        with pytest.raises(ClassifiedFailure) as exc_info:
            await bare.handle_prompt(None, {"content": "Summarize X"})

        assert exc_info.value.classified.kind == ErrorKind.MISSING_CREDENTIAL
        assert "OPENAI_API_KEY" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_questions_default_count(self, module, mock_agent):
        mock_agent.complete.return_value = '{"questions": ["q1"]}'

        assert await module.generate_questions("content") == ["q1"]
        assert "generate 5 thoughtful questions" in mock_agent.complete.await_args.args[0]

    @pytest.mark.asyncio
    async def test_questions_malformed_is_classified(self, module, mock_agent):
        mock_agent.complete.return_value = "not json"

        with pytest.raises(ClassifiedFailure) as exc_info:
            await module.generate_questions("content", 3)

        assert exc_info.value.classified.kind == ErrorKind.MALFORMED_MODEL_OUTPUT

    @pytest.mark.asyncio
    async def test_flashcards_dict(self, module, mock_agent):
        mock_agent.complete.return_value = (
            '{"filename":"biology","flashcards":[{"front":"Q","back":"A"}]}'
        )

        result = await module.generate_flashcards("content", "Cells")

        assert result == {"filename": "biology", "flashcards": [{"front": "Q", "back": "A"}]}


class TestArgumentValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [-3, "five", 2.5, [5]])
    async def test_bad_count_rejected_before_model_call(self, module, mock_agent, count):
        with pytest.raises(InvalidRequestError, match="Invalid questions request"):
            await module.generate_questions("content", count)

        mock_agent.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_count_accepted(self, module, mock_agent):
        mock_agent.complete.return_value = '{"questions": []}'

        assert await module.generate_questions("content", 0) == []
        assert "generate 0 thoughtful questions" in mock_agent.complete.await_args.args[0]

    @pytest.mark.asyncio
    async def test_non_string_content_rejected(self, module, mock_agent):
        with pytest.raises(InvalidRequestError):
            await module.generate_questions(None)
        with pytest.raises(InvalidRequestError, match="Invalid flashcards request"):
            await module.generate_flashcards(["not", "text"])
        with pytest.raises(InvalidRequestError, match="Invalid flashcards request"):
            await module.generate_flashcards("content", title=7)

        mock_agent.complete.assert_not_awaited()

    def test_replace_model_config_from_mapping(self, module):
        module.replace_model_config({"model_name": "gpt-4o", "base_url": "http://localhost:8080/v1"})

        assert module.get_config()["model_name"] == "gpt-4o"
        assert module.get_config()["base_url"] == "http://localhost:8080/v1"

    @pytest.mark.parametrize("config", [None, "gpt-4o", {"model_name": {1, 2}}])
    def test_replace_model_config_rejects_bad_input(self, module, config):
        with pytest.raises(ConfigError):
            module.replace_model_config(config)
        assert module.get_config()["model_name"] == "o3-mini"


class TestGenerateResponse:

    @pytest.mark.asyncio
    async def test_default_agent_without_prompt_or_key(self, module, mock_agent, mock_factory):
        mock_factory.build.reset_mock()

        assert await module.generate_response("Summarize X") == "model answer"

        mock_factory.build.assert_not_called()
        mock_agent.complete.assert_awaited_once_with("Summarize X")

    @pytest.mark.asyncio
    async def test_system_prompt_and_key_build_fresh_agent(self, module, mock_factory):
        mock_factory.build.reset_mock()

        await module.generate_response("Summarize X", "Be brief.", "sk-call")

        assert mock_factory.build.call_args.args[1:] == ("sk-call", "Be brief.")

    @pytest.mark.asyncio
    async def test_missing_credential_is_classified(self, make_service):
        bare = CanvasPluginModule(make_service({}))

        with pytest.raises(ClassifiedFailure) as exc_info:
            await bare.generate_response("Summarize X")

        assert exc_info.value.classified.kind == ErrorKind.MISSING_CREDENTIAL

    @pytest.mark.asyncio
    async def test_non_string_system_prompt_rejected(self, module):
        with pytest.raises(InvalidRequestError, match="Invalid response request"):
            await module.generate_response("Summarize X", 42)


class TestOnload:

    def test_registers_single_command(self):
        host = FakeHost()

        command = onload(host)

        assert host.commands == [command]
        assert command.id == COMMAND_ID == "augmented-canvas-example"
        assert command.name == COMMAND_NAME

    def test_callback_shows_notice(self):
        host = FakeHost()
        onload(host)

        host.commands[0].callback()

        assert host.notices == [COMMAND_NOTICE]
