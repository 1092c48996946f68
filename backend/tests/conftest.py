"""
Augmented Canvas Backend — Test Configuration (conftest.py)
============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The provider is never called: agents are AsyncMock-backed stand-ins
       built by a mocked AgentFactory, and credentials are resolved against
       plain dicts instead of the real process environment.

Fixtures:
    mock_agent:    CompletionAgent stand-in; `complete` is an AsyncMock
    mock_factory:  AgentFactory stand-in returning mock_agent
    make_service:  builds a CanvasService for a given environment/config
    test_client:   HTTPX AsyncClient bound to an app serving make_service()
"""

import os
from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Before any app import: keep test runs quiet and independent of a developer .env
os.environ["LOG_LEVEL"] = "WARNING"

from augmented_canvas.models import ModelConfig  # noqa: E402
from augmented_canvas.services.agent_factory import AgentFactory  # noqa: E402
from augmented_canvas.services.canvas_service import CanvasService  # noqa: E402
from augmented_canvas.services.credentials import CredentialResolver  # noqa: E402
from augmented_canvas.services.llm_base import CompletionAgent  # noqa: E402

ENV_KEY = "sk-env-key"


def make_mock_agent(answer: str = "model answer", model_name: str = "o3-mini") -> MagicMock:
    agent = MagicMock(spec=CompletionAgent)
    agent.complete = AsyncMock(return_value=answer)
    agent.model_name = model_name
    agent.system_prompt = None
    return agent


@pytest.fixture
def mock_agent():
    return make_mock_agent()


@pytest.fixture
def mock_factory(mock_agent):
    factory = MagicMock(spec=AgentFactory)
    factory.build.return_value = mock_agent
    return factory


@pytest.fixture
def env_with_key() -> Dict[str, str]:
    return {"OPENAI_API_KEY": ENV_KEY}


@pytest.fixture
def make_service(mock_factory):
    """
    Build a CanvasService wired to mock_factory.

    Usage:
        service = make_service({"OPENAI_API_KEY": "sk-..."})
        service = make_service({}, ModelConfig(api_key_env=None))
    """

    def _make(
        environ: Optional[Dict[str, str]] = None,
        config: Optional[ModelConfig] = None,
    ) -> CanvasService:
        return CanvasService.create(
            initial_config=config if config is not None else ModelConfig(),
            resolver=CredentialResolver(environ if environ is not None else {}),
            factory=mock_factory,
        )

    return _make


@pytest_asyncio.fixture
async def test_client(make_service, env_with_key):
    """
    HTTPX AsyncClient talking to an app that serves a service whose
    environment holds OPENAI_API_KEY.
    """
    from augmented_canvas.main import create_app

    app = create_app(canvas_service=make_service(env_with_key))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
