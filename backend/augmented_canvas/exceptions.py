"""
Augmented Canvas Backend — Custom Exception Hierarchy
======================================================

What:  Application-specific exceptions for every failure the core can produce.
How:   Each exception class carries a message and optional context dict.
       The ErrorClassifier (services/error_classifier.py) maps them onto the
       three user-facing kinds; adapters render the classified result.
Who:   Raised by services; classified at the adapter boundary.

Exception Hierarchy:
    CanvasError (base)
    ├── MissingCredentialError        → MissingCredential
    ├── ProviderCallError             → ProviderCall
    │   └── UnsupportedProviderError  → ProviderCall
    ├── MalformedModelOutputError     → MalformedModelOutput
    ├── ConfigError                   (adapter input, never reaches the provider)
    └── InvalidRequestError           (adapter input, never reaches the provider)

The failure kind is decided by the exception TYPE raised at the point of
failure, never by matching text inside an error message.
"""

from typing import Any, Dict, Optional


class CanvasError(Exception):
    """
    Base exception for all Augmented Canvas errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MissingCredentialError(CanvasError):
    """
    Raised when no usable credential was found by any precedence step.

    Always recoverable by the caller: set the environment variable named in
    `api_key_env`, or send a per-call key.
    """

    def __init__(
        self,
        api_key_env: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            if api_key_env:
                message = (
                    "OpenAI API key not found. Please either:\n"
                    f"1. Set the {api_key_env} environment variable, or\n"
                    "2. Enter your API key in the plugin settings"
                )
            else:
                message = "API key environment variable not specified for OpenAI"
        ctx = context or {}
        if api_key_env:
            ctx["api_key_env"] = api_key_env
        super().__init__(message=message, context=ctx)
        self.api_key_env = api_key_env


class ProviderCallError(CanvasError):
    """
    Raised when the completion provider rejected the call, the transport to it
    failed, or the client could not be constructed.

    The original provider message is kept verbatim in `message`.
    """

    def __init__(
        self,
        message: str = "The completion provider call failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnsupportedProviderError(ProviderCallError):
    """Raised by AgentFactory for a provider it has no construction path for."""

    def __init__(self, provider: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["provider"] = provider
        super().__init__(message=f"Unsupported model provider: {provider}", context=ctx)
        self.provider = provider


class MalformedModelOutputError(CanvasError):
    """
    Raised when the model answered but its text did not parse as the required
    JSON shape. Distinct from ProviderCallError: the model ran.
    """

    def __init__(
        self,
        message: str = "Failed to parse model response",
        raw_output: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if raw_output is not None:
            # Truncated: model output can be arbitrarily large
            ctx["raw_output"] = raw_output[:500]
        super().__init__(message=message, context=ctx)


class ConfigError(CanvasError):
    """Raised when a configuration payload handed to an adapter is malformed."""

    def __init__(
        self,
        message: str = "Invalid model configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidRequestError(CanvasError):
    """Raised when a plugin or worker payload does not match any request shape."""

    def __init__(
        self,
        message: str = "Invalid request payload",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
