"""Git command exceptions."""

from ..runner import CommandResult


class GitCommandError(Exception):
    """Raised when a git command exits with an unexpected status."""

    def __init__(self, message: str, result: CommandResult | None = None):
        """Initialize git command error.

        Args:
            message: Error message
            result: Result of the failed command
        """
        super().__init__(message)
        self.result = result

    @property
    def output(self) -> str:
        """Captured output of the failed command."""
        return self.result.output if self.result else ""
