"""
Base configuration settings.

Shared pydantic-settings configuration: every settings class reads the
process environment and an optional .env file, ignores unknown keys and is
immutable once loaded.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


def settings_config(env_prefix: str = "", **overrides) -> SettingsConfigDict:
    """
    Build the settings config shared by all configuration classes.

    Args:
        env_prefix: Environment variable prefix (e.g. "DATABASE_")
        **overrides: Additional SettingsConfigDict keys

    Returns:
        SettingsConfigDict: Frozen, case-insensitive, .env-aware config
    """
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        **overrides,
    )


class BaseSettings(PydanticBaseSettings):
    """Base configuration class for all settings modules."""

    model_config = settings_config()
