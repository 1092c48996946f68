"""
Augmented Canvas Backend — Application Configuration
=====================================================

What:  Centralized process settings using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py, the routes, and the service wiring.
When:  Loaded once at module import time.

Settings vs ModelConfig:
    `Settings` describes the process (bind address, logging, CORS, header name)
    and only seeds the initial ModelConfig. The live ModelConfig lives in the
    ConfigStore and can be replaced at runtime through the config endpoint.
    The provider credential itself is NOT a setting: it is read from the
    environment variable named by ModelConfig.api_key_env at resolution time.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults that match the canvas plugin's expectations
    (backend at http://localhost:3000, key header X-OpenAI-Key).
    """

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" admits the plugin's app:// origin.
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Initial Model Configuration ───────────────────────────────────────
    default_model_name: str = Field(default="o3-mini")
    default_api_key_env: Optional[str] = Field(
        default="OPENAI_API_KEY",
        description="Environment variable expected to hold the provider credential",
    )
    default_base_url: Optional[str] = Field(default=None)

    # ── Per-call Credential ───────────────────────────────────────────────
    api_key_header: str = Field(default="X-OpenAI-Key")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


settings = Settings()
