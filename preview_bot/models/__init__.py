"""Event and preview data models."""

from .enums import EventAction, RunOutcome
from .event import (
    PullRequestEvent,
    PullRequestInfo,
    RepositoryInfo,
    load_event_payload,
    parse_event,
)
from .preview import ArtifactSet, PreviewPath

__all__ = [
    "ArtifactSet",
    "EventAction",
    "PreviewPath",
    "PullRequestEvent",
    "PullRequestInfo",
    "RepositoryInfo",
    "RunOutcome",
    "load_event_payload",
    "parse_event",
]
