"""Relay configuration with environment variable loading.

Pydantic-based configuration for the completion provider.
Supports Google Gemini (default) and OpenAI or OpenAI-compatible APIs.
"""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from pdfchat.models.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

GOOGLE_API_KEY_ENV = "GOOGLE_GENERATIVE_AI_API_KEY"
OPENAI_API_KEY_ENVS = ("LLM_API_KEY", "OPENAI_API_KEY")

DEFAULT_MODELS = {
    "google": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
}


def _env_int(name: str) -> int | None:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


def api_key_env(provider: str) -> str:
    """Name of the environment variable(s) holding the provider credential."""
    if provider.lower() == "openai":
        return " or ".join(OPENAI_API_KEY_ENVS)
    return GOOGLE_API_KEY_ENV


def _default_api_key() -> str:
    if os.getenv("LLM_PROVIDER", "google").lower() == "openai":
        return os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", "")
    return os.getenv(GOOGLE_API_KEY_ENV, "")


class RelayConfig(BaseModel):
    """Configuration for the chat relay.

    Attributes:
        provider: Completion provider, ``google`` or ``openai``.
        api_key: Provider credential.
        base_url: API base URL for OpenAI-compatible providers.
        model_name: Model identifier (provider default when empty).
        temperature: Sampling temperature.
        max_tokens: Ceiling on generated tokens per response.
        request_timeout: Wall-clock budget for one relay call, in seconds.
        history_limit: Keep only the most recent N messages (None = all).
    """

    model_config = ConfigDict(validate_default=True)

    provider: Literal["google", "openai"] = Field(
        default_factory=lambda: os.getenv("LLM_PROVIDER", "google").lower(),
        description="Completion provider",
    )
    api_key: str = Field(
        default_factory=_default_api_key,
        description="API key for the completion provider",
        repr=False,
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (OpenAI-compatible providers only)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", ""),
        description="Model to use",
    )
    temperature: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.7")),
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default_factory=lambda: _env_int("LLM_MAX_TOKENS") or 4000,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("CHAT_REQUEST_TIMEOUT", "30")),
        gt=0,
        description="Wall-clock budget for one relay call in seconds",
    )
    history_limit: int | None = Field(
        default_factory=lambda: _env_int("CHAT_HISTORY_LIMIT"),
        ge=1,
        description="Forward only the most recent N messages",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key is missing")
        return v.strip()

    @model_validator(mode="after")
    def default_model_name(self) -> "RelayConfig":
        if not self.model_name:
            self.model_name = DEFAULT_MODELS[self.provider]
        return self


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        ConfigurationError: If no API key is set or a setting is invalid.
    """
    try:
        return RelayConfig()
    except ValidationError as e:
        fields = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        if "api_key" in fields:
            key_env = api_key_env(os.getenv("LLM_PROVIDER", "google"))
            raise ConfigurationError(
                "Server configuration error: API key is missing.",
                f"Please ensure {key_env} is set in your environment variables.",
            ) from e
        raise ConfigurationError(
            "Server configuration error: invalid settings.",
            f"Check settings: {', '.join(sorted(fields))}",
        ) from e
    except ValueError as e:
        raise ConfigurationError(
            "Server configuration error: invalid settings.",
            str(e),
        ) from e
