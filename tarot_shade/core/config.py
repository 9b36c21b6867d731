"""Configuration management for the shade scoring engine."""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    pass


class Settings(BaseSettings):
    """Engine settings loaded from environment variables.

    Rubric thresholds and modifier tables are not configurable here; they
    live in ``tarot_shade.core.scoring.types`` so that every evaluation is a
    pure function of its inputs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    SHADE_ENGINE_ENV: str = Field(default="dev", description="Environment: dev, test, prod")

    # Logging
    LOG_LEVEL: Optional[str] = Field(
        default=None, description="Explicit log level (overrides the environment default)"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()
