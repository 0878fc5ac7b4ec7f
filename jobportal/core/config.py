"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "kaizen_job_portal"

    # OpenAI (chat extraction + Whisper transcription)
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_chat_model: str = "gpt-4o-mini"
    openai_transcription_model: str = "whisper-1"
    use_ai_fitment: bool = True

    # JWT Auth (admin dashboard only)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440
    admin_username: str = "admin"
    admin_password_hash: str = ""

    # App
    frontend_url: str = "http://localhost:3000"
    debug: bool = True
    log_level: str = "INFO"

    @property
    def ai_enabled(self) -> bool:
        """AI features need an API key; everything else works without one."""
        return bool(self.openai_api_key) and self.openai_api_key != "your_openai_api_key_here"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
