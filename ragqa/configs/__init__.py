"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings and
the frozen RuntimeConfig resolved from it at startup.
"""

from ragqa.configs.runtime import RuntimeConfig, build_runtime_config
from ragqa.configs.settings import Settings, get_settings

__all__ = ["RuntimeConfig", "Settings", "build_runtime_config", "get_settings"]
