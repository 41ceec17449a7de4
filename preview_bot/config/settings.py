"""Runtime settings read from the process environment.

Environment variables:
- GITHUB_EVENT_PAYLOAD: JSON-encoded pull request event
- PREVIEW_REPO_TOKEN: Token with write access to the preview repository
- GITHUB_TOKEN: Generic token, used when PREVIEW_REPO_TOKEN is not set
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Per-invocation inputs that come from the environment."""

    event_payload: str | None = Field(
        default=None,
        validation_alias="GITHUB_EVENT_PAYLOAD",
        description="JSON-encoded event payload",
    )
    preview_repo_token: str | None = Field(
        default=None,
        validation_alias="PREVIEW_REPO_TOKEN",
        description="Preview repository write token (preferred)",
    )
    github_token: str | None = Field(
        default=None,
        validation_alias="GITHUB_TOKEN",
        description="Generic token (fallback)",
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("event_payload", "preview_repo_token", "github_token")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty variables as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def resolve_token(self) -> str | None:
        """Return the preview token, falling back to the generic token."""
        return self.preview_repo_token or self.github_token
