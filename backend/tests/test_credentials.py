"""
Augmented Canvas Backend — Credential Resolution Tests
=======================================================

What we test:
    ✅ Non-empty per-call credential always wins
    ✅ Empty per-call credential falls through to the environment
    ✅ Environment variable named by api_key_env is used
    ✅ Missing credential names the expected variable
    ✅ has_credential() mirrors resolve()
"""

import pytest

from augmented_canvas.exceptions import MissingCredentialError
from augmented_canvas.models import ModelConfig
from augmented_canvas.services.credentials import CredentialResolver


class TestPrecedence:
    """Per-call credential → environment variable → MissingCredentialError."""

    @pytest.mark.parametrize(
        "environ",
        [{}, {"OPENAI_API_KEY": "sk-env"}, {"OPENAI_API_KEY": ""}],
    )
    def test_per_call_credential_wins_regardless_of_environment(self, environ):
        resolver = CredentialResolver(environ)
        assert resolver.resolve("sk-call", ModelConfig()) == "sk-call"

    def test_empty_per_call_credential_falls_through_to_environment(self):
        resolver = CredentialResolver({"OPENAI_API_KEY": "sk-env"})
        assert resolver.resolve("", ModelConfig()) == "sk-env"

    def test_absent_per_call_credential_uses_environment(self):
        resolver = CredentialResolver({"OPENAI_API_KEY": "sk-env"})
        assert resolver.resolve(None, ModelConfig()) == "sk-env"

    def test_custom_environment_variable_name(self):
        resolver = CredentialResolver({"MY_KEY": "sk-custom", "OPENAI_API_KEY": "sk-other"})
        config = ModelConfig(api_key_env="MY_KEY")
        assert resolver.resolve(None, config) == "sk-custom"


class TestMissingCredential:

    def test_unset_variable_raises_naming_variable(self):
        resolver = CredentialResolver({})
        with pytest.raises(MissingCredentialError) as exc_info:
            resolver.resolve(None, ModelConfig())
        assert "OPENAI_API_KEY" in exc_info.value.message
        assert exc_info.value.api_key_env == "OPENAI_API_KEY"

    def test_empty_variable_counts_as_missing(self):
        resolver = CredentialResolver({"OPENAI_API_KEY": ""})
        with pytest.raises(MissingCredentialError):
            resolver.resolve("", ModelConfig())

    def test_no_variable_configured(self):
        """With api_key_env unset, only a per-call credential can succeed."""
        resolver = CredentialResolver({"OPENAI_API_KEY": "sk-env"})
        config = ModelConfig(api_key_env=None)
        with pytest.raises(MissingCredentialError, match="not specified"):
            resolver.resolve(None, config)

    def test_has_credential(self):
        resolver = CredentialResolver({})
        assert resolver.has_credential(None, ModelConfig()) is False
        assert resolver.has_credential("sk-call", ModelConfig()) is True
