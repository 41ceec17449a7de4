"""Shared test doubles and sample data for the preview bot tests."""

from .commands import FakeCommandRunner, RecordedCall, populate_clone
from .events import HEAD_SHA, make_event_payload

__all__ = [
    "HEAD_SHA",
    "FakeCommandRunner",
    "RecordedCall",
    "make_event_payload",
    "populate_clone",
]
