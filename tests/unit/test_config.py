"""Unit tests for RelayConfig and get_relay_config."""

import pytest
from pydantic import ValidationError

from pdfchat.agent.config import RelayConfig, get_relay_config
from pdfchat.models.errors import ConfigurationError


class TestRelayConfig:
    """Tests for RelayConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = RelayConfig(
            provider="openai",
            api_key="sk-test-key-12345",
            model_name="gpt-4o",
            temperature=0.5,
            max_tokens=2048,
            request_timeout=10,
            history_limit=6,
        )

        assert config.provider == "openai"
        assert config.api_key == "sk-test-key-12345"
        assert config.model_name == "gpt-4o"
        assert config.temperature == 0.5
        assert config.max_tokens == 2048
        assert config.request_timeout == 10
        assert config.history_limit == 6

    def test_config_with_default_values(self) -> None:
        """Only the API key is required; relay defaults apply otherwise."""
        config = RelayConfig(api_key="test-key")

        assert config.provider == "google"
        assert config.model_name == "gemini-2.0-flash"
        assert config.temperature == 0.7
        assert config.max_tokens == 4000
        assert config.request_timeout == 30
        assert config.history_limit is None

    def test_openai_provider_gets_openai_default_model(self) -> None:
        config = RelayConfig(provider="openai", api_key="sk-test")

        assert config.model_name == "gpt-4o-mini"

    def test_config_fails_with_missing_api_key(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RelayConfig(api_key="")

        assert "API key is missing" in str(exc_info.value)

    def test_config_fails_with_whitespace_api_key(self) -> None:
        with pytest.raises(ValidationError):
            RelayConfig(api_key="   ")

    def test_config_strips_api_key_whitespace(self) -> None:
        config = RelayConfig(api_key="  sk-test-key  ")

        assert config.api_key == "sk-test-key"

    def test_api_key_hidden_from_repr(self) -> None:
        config = RelayConfig(api_key="super-secret-value")

        assert "super-secret-value" not in repr(config)

    def test_config_rejects_unknown_provider(self) -> None:
        with pytest.raises(ValidationError):
            RelayConfig(provider="acme", api_key="k")

    def test_config_fails_with_temperature_out_of_range(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RelayConfig(api_key="k", temperature=2.5)

        assert "temperature" in str(exc_info.value).lower()

    def test_config_fails_with_max_tokens_too_low(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RelayConfig(api_key="k", max_tokens=0)

        assert "max_tokens" in str(exc_info.value).lower()

    def test_config_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            RelayConfig(api_key="k", request_timeout=0)

    def test_config_rejects_zero_history_limit(self) -> None:
        with pytest.raises(ValidationError):
            RelayConfig(api_key="k", history_limit=0)


class TestGetRelayConfig:
    """Tests for get_relay_config factory function."""

    def test_loads_google_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "env-google-key")

        config = get_relay_config()

        assert config.provider == "google"
        assert config.api_key == "env-google-key"

    def test_loads_openai_settings_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LLM_PROVIDER", "openai")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("LLM_BASE_URL", "http://localhost:11434/v1")
        monkeypatch.setenv("CHAT_HISTORY_LIMIT", "10")

        config = get_relay_config()

        assert config.provider == "openai"
        assert config.api_key == "sk-env"
        assert config.base_url == "http://localhost:11434/v1"
        assert config.history_limit == 10

    def test_google_key_ignored_for_openai_provider(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LLM_PROVIDER", "openai")
        monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "google-only")

        with pytest.raises(ConfigurationError) as exc_info:
            get_relay_config()

        assert "OPENAI_API_KEY" in exc_info.value.details

    def test_missing_key_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            get_relay_config()

        assert exc_info.value.status_code == 500
        assert "API key is missing" in exc_info.value.message
        assert "GOOGLE_GENERATIVE_AI_API_KEY" in exc_info.value.details

    def test_invalid_setting_raises_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "k")
        monkeypatch.setenv("LLM_TEMPERATURE", "9")

        with pytest.raises(ConfigurationError) as exc_info:
            get_relay_config()

        assert "temperature" in exc_info.value.details
