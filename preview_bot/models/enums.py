"""Enums shared across the preview flows."""

import enum


class EventAction(str, enum.Enum):
    """Pull request event action, as far as the bot is concerned."""

    OPENED = "opened"
    SYNCHRONIZE = "synchronize"
    CLOSED = "closed"
    MERGED = "merged"
    OTHER = "other"

    @classmethod
    def from_raw(cls, raw: str) -> "EventAction":
        """Map a raw webhook action to a member, unknown values to OTHER."""
        try:
            action = cls(raw)
        except ValueError:
            return cls.OTHER
        return action

    @property
    def is_generation(self) -> bool:
        """Whether this action (re)publishes the preview."""
        return self in (EventAction.OPENED, EventAction.SYNCHRONIZE)

    @property
    def is_cleanup(self) -> bool:
        """Whether this action removes the preview."""
        return self in (EventAction.CLOSED, EventAction.MERGED)


class RunOutcome(str, enum.Enum):
    """Successful end states of one invocation."""

    PUBLISHED = "published"
    UNCHANGED = "unchanged"  # Nothing to commit on publish
    REMOVED = "removed"
    NOTHING_TO_REMOVE = "nothing_to_remove"
    SKIPPED_UNMONITORED = "skipped_unmonitored"
    SKIPPED_ACTION = "skipped_action"
