"""Configuration management for the preview deployment bot.

This module provides type-safe configuration with support for:
- JSON or YAML configuration files with environment variable substitution
- camelCase or snake_case keys
- Pydantic-based validation and type safety
- Runtime settings (event payload, tokens) read from the environment

Example usage:
    from preview_bot.config import load_config

    config = load_config("config.json")
    preview_repo = config.preview_repository.full_name
"""

from .exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    ConfigurationValidationError,
)
from .loader import (
    ConfigurationLoader,
    get_config,
    is_config_loaded,
    load_config,
)
from .models import (
    ArtifactBase,
    ArtifactsConfig,
    BuildConfig,
    BuildStrategyConfig,
    Config,
    GitConfig,
    LogLevel,
    PreviewRepositoryConfig,
    StrategyKind,
    SystemConfig,
)
from .settings import RuntimeSettings
from .utils import get_config_summary, redact_url

__all__ = [
    "ArtifactBase",
    "ArtifactsConfig",
    "BuildConfig",
    "BuildStrategyConfig",
    "Config",
    "ConfigurationError",
    "ConfigurationFileError",
    "ConfigurationLoader",
    "ConfigurationValidationError",
    "GitConfig",
    "LogLevel",
    "PreviewRepositoryConfig",
    "RuntimeSettings",
    "StrategyKind",
    "SystemConfig",
    "get_config",
    "get_config_summary",
    "is_config_loaded",
    "load_config",
    "redact_url",
]
