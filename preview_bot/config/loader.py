"""Configuration loading.

This module loads the bot configuration from a JSON or YAML file (chosen by
file suffix), validates it, and keeps the loaded instance for the lifetime
of the process. The configuration is loaded once per invocation and is
read-only afterwards.

The file is located in this order:
1. Explicit path (``--config``)
2. PREVIEW_BOT_CONFIG_PATH environment variable
3. config.json / config.yaml / config.yml in the current working directory
"""

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    ConfigurationValidationError,
)
from .models import Config

CONFIG_PATH_ENV_VAR = "PREVIEW_BOT_CONFIG_PATH"
DEFAULT_CONFIG_FILENAMES = ("config.json", "config.yaml", "config.yml")


class ConfigurationLoader:
    """Handles loading and validation of configuration from files or dicts."""

    def __init__(self) -> None:
        """Initialize configuration loader."""
        self._config: Config | None = None
        self._config_file_path: Path | None = None

    def load_from_file(self, config_path: str | Path) -> Config:
        """Load configuration from a JSON or YAML file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Loaded and validated configuration

        Raises:
            ConfigurationFileError: If file cannot be read or parsed
            ConfigurationValidationError: If configuration validation fails
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationFileError(
                f"Configuration file not found: {config_path}",
                file_path=str(config_path),
            )

        if not config_path.is_file():
            raise ConfigurationFileError(
                f"Configuration path is not a file: {config_path}",
                file_path=str(config_path),
            )

        try:
            with open(config_path, encoding="utf-8") as f:
                if config_path.suffix.lower() == ".json":
                    config_data = json.load(f)
                else:
                    config_data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationFileError(
                f"Failed to parse configuration file: {e}",
                file_path=str(config_path),
            ) from e
        except OSError as e:
            raise ConfigurationFileError(
                f"Failed to read configuration file: {e}",
                file_path=str(config_path),
            ) from e

        if config_data is None:
            config_data = {}

        if not isinstance(config_data, dict):
            raise ConfigurationFileError(
                "Configuration file must contain a mapping at the top level",
                file_path=str(config_path),
            )

        config = self.load_from_dict(config_data)
        self._config_file_path = config_path.resolve()
        return config

    def load_from_dict(self, config_data: dict[str, Any]) -> Config:
        """Load configuration from a dictionary.

        Args:
            config_data: Configuration data dictionary

        Returns:
            Loaded and validated configuration

        Raises:
            ConfigurationValidationError: If configuration validation fails
        """
        try:
            self._config = Config(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(
                f"Configuration validation failed: {e}",
                validation_errors=e.errors(),
            ) from e
        except ValueError as e:
            # Raised by environment variable substitution
            raise ConfigurationValidationError(
                f"Configuration validation failed: {e}"
            ) from e

        return self._config

    def find_config_file(self) -> Path | None:
        """Find the configuration file in standard locations.

        Returns:
            Path to found configuration file, or None if not found
        """
        search_paths: list[Path] = []

        env_path_str = os.getenv(CONFIG_PATH_ENV_VAR)
        if env_path_str:
            search_paths.append(Path(env_path_str))

        search_paths.extend(Path.cwd() / name for name in DEFAULT_CONFIG_FILENAMES)

        for path in search_paths:
            if path.is_file():
                return path

        return None

    def auto_load(self) -> Config:
        """Load configuration from the first standard location that exists.

        Raises:
            ConfigurationFileError: If no configuration file is found
            ConfigurationValidationError: If configuration validation fails
        """
        config_path = self.find_config_file()

        if config_path is None:
            raise ConfigurationFileError(
                "No configuration file found (looked at "
                f"${CONFIG_PATH_ENV_VAR} and {', '.join(DEFAULT_CONFIG_FILENAMES)})"
            )

        return self.load_from_file(config_path)

    @property
    def config(self) -> Config | None:
        """Get the loaded configuration."""
        return self._config

    @property
    def config_file_path(self) -> Path | None:
        """Get the path to the loaded configuration file."""
        return self._config_file_path

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._config is not None


# Global configuration loader instance
_loader = ConfigurationLoader()


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from an explicit path or the standard locations.

    Args:
        config_path: Explicit path to configuration file

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If configuration cannot be loaded or is invalid
    """
    try:
        if config_path:
            return _loader.load_from_file(config_path)
        return _loader.auto_load()
    except (ConfigurationFileError, ConfigurationValidationError) as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e


def get_config() -> Config:
    """Get the currently loaded configuration.

    Raises:
        ConfigurationError: If no configuration has been loaded
    """
    if not _loader.is_loaded or _loader.config is None:
        raise ConfigurationError("No configuration loaded. Call load_config() first.")

    return _loader.config


def is_config_loaded() -> bool:
    """Check if configuration has been loaded."""
    return _loader.is_loaded
