"""Pydantic configuration models for the preview deployment bot.

This module defines the configuration schema with type safety, validation,
and environment variable substitution support. Field names are snake_case
in Python; the configuration file may use either snake_case or camelCase
keys (``monitoredRepositories``, ``previewRepository``).

The configuration hierarchy follows this structure:
- Config: Root configuration with the monitored repositories and the
  preview repository coordinates
- SystemConfig: Process-wide settings (log level, scratch root, timeouts)
- GitConfig, BuildConfig, ArtifactsConfig: Settings for each flow step

Environment variables are substituted using the format ${VAR_NAME} with
optional defaults: ${VAR_NAME:default_value}
"""

import os
import re
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StrategyKind(str, Enum):
    """Kinds of build strategies."""

    SCRIPT = "script"  # Relative path, only run if present in the tree
    COMMAND = "command"  # Tooling command, always attempted


class ArtifactBase(str, Enum):
    """Directory that published artifact paths are made relative to."""

    CANDIDATE = "candidate"
    WORKING_TREE = "working_tree"


def _validate_relative_path(value: str, what: str) -> str:
    path = PurePosixPath(value)
    if not value or path.is_absolute():
        raise ValueError(f"{what} must be a relative path: {value!r}")
    if ".." in path.parts:
        raise ValueError(f"{what} must not contain '..': {value!r}")
    return value


class BaseConfigModel(BaseModel):
    """Base configuration model with environment variable substitution."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def substitute_env_vars(cls, values: Any) -> Any:
        """Substitute environment variables in string values.

        Supports formats:
        - ${VAR_NAME} - Required environment variable
        - ${VAR_NAME:default} - Optional with default value

        Args:
            values: Raw configuration values

        Returns:
            Configuration values with environment variables substituted

        Raises:
            ValueError: If required environment variable is missing
        """
        if not isinstance(values, dict):
            return values

        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)

            env_value = os.getenv(var_name)
            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(
                    f"Required environment variable '{var_name}' not found"
                )

        def substitute_value(value: Any) -> Any:
            if isinstance(value, str):
                return re.sub(pattern, replacer, value)
            elif isinstance(value, dict):
                return {k: substitute_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [substitute_value(item) for item in value]
            else:
                return value

        return {key: substitute_value(value) for key, value in values.items()}


class SystemConfig(BaseConfigModel):
    """Process-wide settings."""

    log_level: LogLevel = Field(
        default=LogLevel.INFO, description="Logging level when none is given on the CLI"
    )

    scratch_root: str | None = Field(
        default=None,
        description="Directory for scratch clones (defaults to the system temp dir)",
    )

    command_timeout: int | None = Field(
        default=None,
        ge=1,
        le=86400,
        description="Timeout in seconds for each external command (none if unset)",
    )


class GitConfig(BaseConfigModel):
    """Settings for cloning, committing and pushing."""

    base_url: str = Field(
        default="https://github.com",
        description="Base URL that repository full names are appended to",
    )

    push_branch: str = Field(
        default="main", description="Branch of the preview repository to push to"
    )

    committer_name: str = Field(
        default="GitHub Actions", description="Committer name for preview commits"
    )

    committer_email: str = Field(
        default="actions@github.com", description="Committer email for preview commits"
    )

    authenticate_source_clone: bool = Field(
        default=False,
        description="Embed the token when cloning the source repository too",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Strip the trailing slash and reject empty URLs."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("Git base URL cannot be empty")
        return v

    @field_validator("push_branch", "committer_name", "committer_email")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Reject blank values."""
        if not v or v.strip() == "":
            raise ValueError("Value cannot be empty")
        return v.strip()


class BuildStrategyConfig(BaseConfigModel):
    """One candidate build strategy."""

    kind: StrategyKind = Field(description="Script path or tooling command")

    target: str = Field(description="Script path or command line")

    @model_validator(mode="after")
    def validate_target(self) -> "BuildStrategyConfig":
        """Script targets must stay inside the working tree."""
        if not self.target.strip():
            raise ValueError("Build strategy target cannot be empty")
        if self.kind == StrategyKind.SCRIPT:
            _validate_relative_path(self.target, "Build script")
        return self


DEFAULT_BUILD_STRATEGIES: list[dict[str, str]] = [
    {"kind": "script", "target": "build-docs.sh"},
    {"kind": "script", "target": "generate-docs.sh"},
    {"kind": "script", "target": "build.sh"},
    {"kind": "command", "target": "npm run build-docs"},
    {"kind": "command", "target": "npm run generate-docs"},
    {"kind": "command", "target": "python generate_docs.py"},
    {"kind": "script", "target": "./generate.sh"},
]

DEFAULT_ARTIFACT_DIRECTORIES: list[str] = [
    "dist",
    "output",
    "docs/html",
    "build",
    "html",
    ".",
]


class BuildConfig(BaseConfigModel):
    """Build discovery configuration."""

    strategies: list[BuildStrategyConfig] = Field(
        default_factory=lambda: [
            BuildStrategyConfig(**item) for item in DEFAULT_BUILD_STRATEGIES
        ],
        description="Build strategies in preference order",
    )


class ArtifactsConfig(BaseConfigModel):
    """Artifact location configuration."""

    directories: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ARTIFACT_DIRECTORIES),
        description="Candidate output directories in preference order",
    )

    extension: str = Field(
        default=".html", description="File name suffix of published artifacts"
    )

    relative_to: ArtifactBase = Field(
        default=ArtifactBase.CANDIDATE,
        description="Directory artifact paths are mirrored from",
    )

    @field_validator("directories")
    @classmethod
    def validate_directories(cls, v: list[str]) -> list[str]:
        """Ensure candidate directories are relative and inside the tree."""
        if not v:
            raise ValueError("At least one artifact directory must be configured")
        return [_validate_relative_path(d, "Artifact directory") for d in v]

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Extensions must start with a dot."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"Artifact extension must look like '.html': {v!r}")
        return v


class PreviewRepositoryConfig(BaseConfigModel):
    """Coordinates of the repository that hosts the previews."""

    owner: str = Field(description="Owner (user or organization) of the repository")

    name: str = Field(description="Repository name")

    @field_validator("owner", "name")
    @classmethod
    def validate_segment(cls, v: str) -> str:
        """Owner and name are single URL path segments."""
        v = v.strip()
        if not v:
            raise ValueError("Preview repository owner and name cannot be empty")
        if "/" in v:
            raise ValueError(f"Invalid repository segment: {v!r}")
        return v

    @property
    def full_name(self) -> str:
        """Return ``owner/name``."""
        return f"{self.owner}/{self.name}"


class Config(BaseConfigModel):
    """Root configuration."""

    monitored_repositories: list[str] = Field(
        description="Names of source repositories that get previews"
    )

    preview_repository: PreviewRepositoryConfig = Field(
        description="Repository the previews are published to"
    )

    system: SystemConfig = Field(
        default_factory=SystemConfig, description="Process-wide settings"
    )

    git: GitConfig = Field(default_factory=GitConfig, description="Git settings")

    build: BuildConfig = Field(
        default_factory=BuildConfig, description="Build discovery settings"
    )

    artifacts: ArtifactsConfig = Field(
        default_factory=ArtifactsConfig, description="Artifact location settings"
    )

    @field_validator("monitored_repositories")
    @classmethod
    def validate_monitored_repositories(cls, v: list[str]) -> list[str]:
        """Strip names and drop duplicates. An empty list skips every event."""
        names: list[str] = []
        for name in v:
            name = name.strip()
            if name and name not in names:
                names.append(name)
        return names
