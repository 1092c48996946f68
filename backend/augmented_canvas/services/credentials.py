"""
Augmented Canvas Backend — Credential Resolution
=================================================

What:  Decides which provider credential governs a call.
Why:   One rule for every surface: a key typed into the plugin settings
       overrides the backend environment, and neither is ever required when
       the other is present.
Who:   CanvasService (fresh agents), DefaultAgentHolder (startup), and the
       has_api_key readiness check.

Precedence (first match wins):
    1. The per-call credential, if present and non-empty
       (HTTP header X-OpenAI-Key, plugin `api_key` argument, worker message).
    2. The environment variable named by ModelConfig.api_key_env, if the name
       is set and the variable holds a non-empty value.
    3. Otherwise MissingCredentialError naming the expected variable.

An empty per-call credential counts as "not provided": the plugin always sends
the header, with an empty value when the user has not entered a key.
"""

import os
from typing import Mapping, Optional

from augmented_canvas.exceptions import MissingCredentialError
from augmented_canvas.models import ModelConfig


class CredentialResolver:
    """
    Resolves credentials against an environment mapping.

    Args:
        environ: Mapping consulted for step 2. Defaults to the live os.environ,
                 read at resolution time so exported variables are picked up.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ if environ is not None else os.environ

    def resolve(self, per_call_credential: Optional[str], config: ModelConfig) -> str:
        """
        Return the governing credential.

        Raises:
            MissingCredentialError: No precedence step produced a credential.
        """
        if per_call_credential:
            return per_call_credential

        if config.api_key_env:
            value = self._environ.get(config.api_key_env)
            if value:
                return value

        raise MissingCredentialError(api_key_env=config.api_key_env)

    def has_credential(self, per_call_credential: Optional[str], config: ModelConfig) -> bool:
        """True when resolve() would succeed."""
        try:
            self.resolve(per_call_credential, config)
        except MissingCredentialError:
            return False
        return True
