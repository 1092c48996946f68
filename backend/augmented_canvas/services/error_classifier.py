"""
Augmented Canvas Backend — Error Classification
================================================

What:  Turns any failure raised by the core into a ClassifiedError, the only
       error representation that crosses an adapter boundary.
Why:   The three surfaces render errors differently but must agree on what
       went wrong. Deciding by exception type keeps a provider message that
       happens to mention "API key" from being reported as a missing key.

Mapping (by exception type):
    MissingCredentialError     → MissingCredential     fixed remediation message
    MalformedModelOutputError  → MalformedModelOutput  parse failure, model ran
    ProviderCallError          → ProviderCall          original message appended
    anything else              → ProviderCall          original message appended

Adapters decide how a ClassifiedError is rendered (HTTP status + body shape,
raised plugin exception, worker error dict).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from augmented_canvas.exceptions import (
    CanvasError,
    MalformedModelOutputError,
    MissingCredentialError,
)


class ErrorKind(str, Enum):
    MISSING_CREDENTIAL = "MissingCredential"
    PROVIDER_CALL = "ProviderCall"
    MALFORMED_MODEL_OUTPUT = "MalformedModelOutput"


class ClassifiedError(BaseModel):
    kind: ErrorKind
    message: str


def missing_credential_message(api_key_env: Optional[str]) -> str:
    if api_key_env:
        return (
            "OpenAI API key not found. Please enter your API key in the plugin "
            f"settings or set the {api_key_env} environment variable before "
            "starting the backend."
        )
    return (
        "OpenAI API key not found. Please enter your API key in the plugin "
        "settings; no API key environment variable is configured."
    )


def classify(exc: Exception) -> ClassifiedError:
    """Classify `exc` into one of the three user-facing kinds."""
    if isinstance(exc, MissingCredentialError):
        return ClassifiedError(
            kind=ErrorKind.MISSING_CREDENTIAL,
            message=missing_credential_message(exc.api_key_env),
        )

    if isinstance(exc, MalformedModelOutputError):
        return ClassifiedError(
            kind=ErrorKind.MALFORMED_MODEL_OUTPUT,
            message=exc.message,
        )

    detail = exc.message if isinstance(exc, CanvasError) else str(exc)
    return ClassifiedError(
        kind=ErrorKind.PROVIDER_CALL,
        message=f"Model provider call failed: {detail}",
    )
