"""Application configuration management."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Settings
    app_name: str = "RecordHub API"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API Settings
    api_v1_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 8000

    # Owner resolution (no authentication layer yet)
    default_owner_id: int = Field(
        default=1,
        description="Owner identifier applied to every owner-scoped request"
    )

    # LLM Provider Configuration
    llm_provider: str = Field(
        default="cohere",
        description="LLM provider to use: 'cohere', 'gemini' or 'openrouter'"
    )

    # Cohere API Configuration
    cohere_api_key: str = Field(default="", description="Cohere API key")
    cohere_api_url: str = Field(
        default="https://api.cohere.com/v1/chat",
        description="Cohere chat endpoint"
    )
    cohere_model: str = Field(default="command-r", description="Cohere model name")

    # Gemini API Configuration
    gemini_api_key: str = Field(default="", description="Gemini API key")
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model name"
    )

    # OpenRouter API Configuration
    openrouter_api_key: str = Field(
        default="",
        description="OpenRouter API key (required if llm_provider='openrouter')"
    )
    openrouter_api_url: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="OpenRouter API base URL"
    )
    openrouter_model: str = Field(
        default="google/gemini-2.0-flash-001",
        description="OpenRouter model name"
    )

    # LLM call behaviour
    llm_timeout: int = 60
    llm_max_retries: int = Field(
        default=1,
        description="Attempts per model call; 1 means a failure surfaces immediately"
    )

    # Triplet extraction / log analysis limits
    triplet_prompt_char_limit: int = Field(
        default=4000,
        description="Characters of an uploaded log embedded in the extraction prompt"
    )
    log_analysis_char_limit: int = Field(
        default=2000,
        description="Characters of a log embedded in the domain analysis prompt"
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted upload size in bytes"
    )

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///:memory:"
    database_pool_size: int = 10
    database_max_overflow: int = 20
    database_echo: bool = False  # SQL query logging

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings: Application settings loaded from environment
    """
    return Settings()


# Global settings instance
settings = get_settings()
