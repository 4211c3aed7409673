"""Application settings and configuration."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application
    app_name: str = "Mindful Journal"
    debug: bool = False
    environment: str = "production"

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./mindful_journal.db")
    database_echo: bool = False

    # Completion endpoint; fixed per client, not per request
    openai_base_url: Optional[str] = None
    completion_model: str = "gpt-4o-mini"
    completion_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    completion_max_tokens: int = Field(default=500, gt=0)
    api_key_setting_key: str = "openaiApiKey"

    # Monitoring
    log_level: str = "INFO"
    json_logs: bool = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
