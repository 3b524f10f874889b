"""
Settings Management

Provides centralized, type-safe configuration using Pydantic.
Supports environment variables, .env files, and grouped config.

Design decisions:
- Using pydantic-settings for validation and type coercion
- Immutable settings after initialization (frozen model)
- One group per backend, so each credential lives next to its defaults
- Credentials are optional at load time; validate_credentials() enforces
  the one the server cannot start without
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from rat.core.exceptions import MissingCredentialError


class ReasoningSettings(BaseSettings):
    """Streaming reasoning backend (DeepSeek) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DEEPSEEK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr | None = Field(default=None)
    base_url: str = Field(default="https://api.deepseek.com")
    model: str = Field(default="deepseek-reasoner")

    # Only the reasoning side-channel is used, so the visible answer is capped
    max_tokens: int = Field(default=1, ge=1)


class OpenRouterSettings(BaseSettings):
    """Multi-vendor router (OpenRouter) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OPENROUTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr | None = Field(default=None)
    base_url: str = Field(default="https://openrouter.ai/api/v1")
    default_model: str = Field(default="openai/gpt-4")


class AnthropicSettings(BaseSettings):
    """Direct single-vendor backend (Anthropic) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ANTHROPIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr | None = Field(default=None)
    model: str = Field(default="claude-3-5-sonnet-20241022")
    max_tokens: int = Field(default=4096, ge=1)

    # Requested model ids containing this substring are sent to Anthropic
    route_keyword: str = Field(default="claude", min_length=1)


class ContextSettings(BaseSettings):
    """Conversation context window configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CONTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_entries: int = Field(default=10, ge=1)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """
    Master settings aggregator.

    This is the single source of truth for all configuration.
    Sub-settings are composed here to maintain clear boundaries.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,  # Immutable after creation
    )

    # Application metadata
    app_name: str = Field(default="rat-server")
    app_version: str = Field(default="0.1.0")

    # Offline mode - scripted stub backends, no API keys, no network
    offline_mode: bool = Field(default=False)

    # Passed to the vendor SDK clients
    request_timeout: float = Field(default=600.0, gt=0)

    # Component settings (composed)
    reasoning: ReasoningSettings = Field(default_factory=ReasoningSettings)
    openrouter: OpenRouterSettings = Field(default_factory=OpenRouterSettings)
    anthropic: AnthropicSettings = Field(default_factory=AnthropicSettings)
    context: ContextSettings = Field(default_factory=ContextSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def validate_credentials(self) -> None:
        """
        Check that the server can start.

        The reasoning key is mandatory. The router and Anthropic keys are
        only needed by their own code paths and fail at call time instead.

        Raises:
            MissingCredentialError: DEEPSEEK_API_KEY is not set
        """
        if self.offline_mode:
            return
        if self.reasoning.api_key is None or not self.reasoning.api_key.get_secret_value():
            raise MissingCredentialError(
                "DEEPSEEK_API_KEY is required",
                context={"setting": "DEEPSEEK_API_KEY"},
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure only one settings instance exists.
    This is safe because settings are frozen/immutable.
    """
    return Settings()
