"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from ragqa.configs.base import BaseSettings
from ragqa.configs.bedrock import BedrockSettings, GuardrailSettings
from ragqa.configs.database import DatabaseSettings
from ragqa.configs.pipeline import PipelineSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the HTTP API (JSON list in CORS_ALLOW_ORIGINS)",
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    bedrock: BedrockSettings = Field(default_factory=BedrockSettings)
    guardrail: GuardrailSettings = Field(default_factory=GuardrailSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once; later changes are not observed.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
