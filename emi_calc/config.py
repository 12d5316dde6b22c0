"""
Runtime settings using pydantic-settings.
Values come from environment variables (or a .env file) with sensible defaults.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Calculator settings with environment variable support."""

    # Gemini advisor
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-flash-latest"
    EMI_ADVISOR_ENABLED: bool = True
    EMI_ADVISOR_TIMEOUT: float = 20.0  # seconds

    # Logging
    EMI_LOG_LEVEL: str = "WARNING"

    # Web API
    PORT: int = 8710

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("EMI_LOG_LEVEL")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance to avoid re-reading the environment on every call."""
    return Settings()
