"""Pull request event intake.

The inbound webhook payload is parsed into an immutable ``PullRequestEvent``.
Only the fields the preview flows need are modelled; everything else in the
payload is ignored. A payload missing ``action``, ``repository`` or
``pull_request`` is rejected with ``MalformedEventError`` before any side
effect happens.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import MalformedEventError
from .enums import EventAction

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("action", "repository", "pull_request")


class EventModel(BaseModel):
    """Base for event payload models: immutable, extra fields ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class RepositoryOwner(EventModel):
    """Owner block of the repository payload."""

    login: str


class RepositoryInfo(EventModel):
    """Source repository the pull request belongs to."""

    name: str = Field(min_length=1, pattern=r"^[^/\\]+$")
    full_name: str = Field(min_length=1)
    owner: RepositoryOwner

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names become a directory in the preview repository."""
        if v in (".", ".."):
            raise ValueError(f"Invalid repository name: {v!r}")
        return v


class PullRequestHead(EventModel):
    """Head commit of the pull request."""

    sha: str = Field(min_length=1)


class PullRequestInfo(EventModel):
    """Pull request number and head commit."""

    number: int = Field(gt=0)
    head: PullRequestHead

    @property
    def head_sha(self) -> str:
        """Full head commit SHA."""
        return self.head.sha

    @property
    def short_sha(self) -> str:
        """Seven-character form of the head commit SHA."""
        return self.head.sha[:7]


class PullRequestEvent(EventModel):
    """Typed, validated pull request event."""

    action: EventAction
    raw_action: str
    repository: RepositoryInfo
    pull_request: PullRequestInfo

    def __str__(self) -> str:
        """Return human-readable string representation."""
        return (
            f"PR #{self.pull_request.number} from {self.repository.full_name} "
            f"(action: {self.raw_action})"
        )


def parse_event(payload: Any) -> PullRequestEvent:
    """Parse a decoded event payload.

    Args:
        payload: Decoded JSON payload

    Returns:
        Validated event

    Raises:
        MalformedEventError: If required fields are missing or invalid
    """
    if not isinstance(payload, dict):
        raise MalformedEventError(
            f"Event payload must be a JSON object, got {type(payload).__name__}"
        )

    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if missing:
        raise MalformedEventError(
            f"Missing required event payload fields: {', '.join(missing)}",
            missing_fields=missing,
        )

    raw_action = str(payload["action"])
    try:
        return PullRequestEvent(
            action=EventAction.from_raw(raw_action),
            raw_action=raw_action,
            repository=payload["repository"],
            pull_request=payload["pull_request"],
        )
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise MalformedEventError(
            f"Invalid event payload: {', '.join(fields)}", missing_fields=fields
        ) from e


def load_event_payload(
    env_payload: str | None = None,
    argument: str | None = None,
    event_file: str | Path | None = None,
) -> Any:
    """Decode the raw event payload from the first source that is set.

    Sources are consulted in order: the environment variable value, the
    command-line argument, then an event file. With no source at all an
    empty object is returned, which ``parse_event`` rejects.

    Raises:
        MalformedEventError: If the selected source is not valid JSON
    """
    if env_payload:
        source, raw = "environment", env_payload
    elif argument:
        source, raw = "argument", argument
    elif event_file:
        source = f"file {event_file}"
        try:
            raw = Path(event_file).read_text(encoding="utf-8")
        except OSError as e:
            raise MalformedEventError(f"Cannot read event file: {e}") from e
    else:
        logger.debug("No event payload supplied")
        return {}

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedEventError(
            f"Event payload from {source} is not JSON: {e}"
        ) from e

    logger.debug(f"Loaded event payload from {source}")
    return payload
