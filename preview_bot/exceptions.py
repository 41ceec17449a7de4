"""Preview bot exceptions.

Every fatal condition of a run is a ``PreviewBotError``; the CLI turns any
of them into exit code 1. Benign outcomes (unmonitored repository,
unhandled action, nothing to commit) are not exceptions, see
``preview_bot.models.enums.RunOutcome``.
"""


class PreviewBotError(Exception):
    """Base exception for fatal preview bot errors."""

    def __init__(
        self,
        message: str,
        repository: str | None = None,
        pr_number: int | None = None,
        step: str | None = None,
    ):
        """Initialize preview bot error.

        Args:
            message: Error message
            repository: Source repository name, when known
            pr_number: Pull request number, when known
            step: Flow step that failed (clone, build, publish, ...)
        """
        super().__init__(message)
        self.repository = repository
        self.pr_number = pr_number
        self.step = step

    @property
    def context(self) -> str:
        """Short ``repo#pr step=...`` string for log lines."""
        parts = []
        if self.repository:
            target = self.repository
            if self.pr_number is not None:
                target += f"#{self.pr_number}"
            parts.append(target)
        if self.step:
            parts.append(f"step={self.step}")
        return " ".join(parts)


class MalformedEventError(PreviewBotError):
    """Raised when the event payload is missing required fields or is not JSON."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        """Initialize malformed event error.

        Args:
            message: Error message
            missing_fields: Required fields absent from the payload
        """
        super().__init__(message, step="intake")
        self.missing_fields = missing_fields or []


class BuildStrategyFailed(PreviewBotError):
    """Raised by a single build strategy; recovered by trying the next one."""

    def __init__(self, message: str, strategy: str, returncode: int | None = None):
        """Initialize build strategy failure.

        Args:
            message: Error message
            strategy: Description of the failed strategy
            returncode: Exit status of the build process, if it ran
        """
        super().__init__(message, step="build")
        self.strategy = strategy
        self.returncode = returncode


class ArtifactsNotFoundError(PreviewBotError):
    """Raised when no candidate directory contains any artifact."""

    pass


class PublishFailedError(PreviewBotError):
    """Raised when cloning, committing or pushing a preview fails."""

    pass


class CleanupFailedError(PreviewBotError):
    """Raised when removing a preview from the preview repository fails."""

    pass
