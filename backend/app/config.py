"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "SubSentry"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/subsentry.db"

    # AI Provider
    ai_provider: str = "openai"  # openai, openrouter, anthropic, ollama
    ai_model: str = "gpt-4.1"
    ai_vision_model: str = "gpt-4.1"
    ai_base_url: Optional[str] = None  # For Ollama: http://localhost:11434
    ai_timeout_seconds: float = 30.0

    # API Keys (optional based on provider)
    openai_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # Renewal scheduling
    rollover_enabled: bool = True
    rollover_interval_seconds: int = 3600
    upcoming_limit: int = 5

    # Server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
