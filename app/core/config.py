"""
App Configuration.

This module defines the global application settings using Pydantic Settings.
It loads configuration variables from environment variables and/or a .env file,
ensuring typed and validated settings for the application.

Attributes:
    settings: The global instance of the Settings class, ready to be imported and used.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from app.schemas.requirement import TieBreak


class Settings(BaseSettings):
    """
    Application Settings.

    Attributes:
        PROJECT_NAME: The name of the project.
        LOG_LEVEL: Root log level passed to setup_logging.
        OPENAI_API_KEY: Key for the reasoning and embedding services. When
            unset the engine runs on keyword rules alone.
        REASONING_TIMEOUT_SECS: Per-attempt timeout for external calls.
        REASONING_MAX_ATTEMPTS: Attempts for the reasoning call before fallback.
        REQUIREMENT_TIE_BREAK: Resolution when reasoning text asserts both
            "required" and "not required".
        FALLBACK_CONFIDENCE: Neutral confidence used by keyword-only results.
        PATTERN_LIBRARY_PATH: Alternative patterns YAML file.
    """

    # Core
    PROJECT_NAME: str = "Modification Review Engine"
    LOG_LEVEL: str = "INFO"

    # AI / Model Providers
    OPENAI_API_KEY: Optional[SecretStr] = None
    LLM_MODEL: str = "gpt-5-mini"
    EMBEDDING_MODEL: str = "text-embedding-3-small"
    SIMILARITY_ENABLED: bool = True

    # External call limits
    REASONING_TIMEOUT_SECS: float = Field(default=30.0, gt=0)
    REASONING_MAX_ATTEMPTS: int = Field(default=2, ge=1)

    # Decision behaviour
    REQUIREMENT_TIE_BREAK: TieBreak = TieBreak.FIRST_MENTION
    FALLBACK_CONFIDENCE: float = Field(default=0.5, ge=0.0, le=1.0)
    PATTERN_LIBRARY_PATH: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_empty=True, extra="ignore"
    )


settings = Settings()
