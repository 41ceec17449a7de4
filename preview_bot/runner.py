"""External process collaborator.

Every clone, build and commit goes through a ``CommandRunner``. The
orchestrator only sees the exit status and captured output, so tests can
substitute a runner that records calls and returns scripted results.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .config.utils import redact_url

logger = logging.getLogger(__name__)

COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127
COMMAND_TIMED_OUT = 124


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of one command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, stripped."""
        return "\n".join(p for p in (self.stdout.strip(), self.stderr.strip()) if p)

    @property
    def display(self) -> str:
        """Command line with credentials redacted, for log messages."""
        return " ".join(redact_url(arg) for arg in self.args)


class CommandRunner(ABC):
    """Runs one external command synchronously."""

    @abstractmethod
    def run(self, args: Sequence[str], cwd: Path | None = None) -> CommandResult:
        """Run a command and return its result.

        Implementations never raise for a non-zero exit status; callers
        decide whether a failure is fatal.

        Args:
            args: Program and arguments
            cwd: Working directory
        """
        pass


class SubprocessCommandRunner(CommandRunner):
    """``CommandRunner`` backed by ``subprocess.run``."""

    def __init__(self, timeout: int | None = None):
        """Initialize the runner.

        Args:
            timeout: Seconds before a command is killed; None waits forever
        """
        self.timeout = timeout

    def run(self, args: Sequence[str], cwd: Path | None = None) -> CommandResult:
        """Run a command, capturing its output."""
        argv = tuple(str(a) for a in args)
        display = " ".join(redact_url(a) for a in argv)
        logger.debug(f"Running: {display} (cwd={cwd})")

        try:
            completed = subprocess.run(  # nosec B603
                argv,
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            logger.debug(f"Command not found: {display}")
            return CommandResult(argv, COMMAND_NOT_FOUND, stderr=str(e))
        except subprocess.TimeoutExpired as e:
            logger.warning(f"Command timed out after {self.timeout}s: {display}")
            return CommandResult(
                argv,
                COMMAND_TIMED_OUT,
                stdout=_decode(e.stdout),
                stderr=_decode(e.stderr) or f"timed out after {self.timeout}s",
                timed_out=True,
            )
        except OSError as e:
            logger.debug(f"Command could not be executed: {display}: {e}")
            return CommandResult(argv, COMMAND_NOT_EXECUTABLE, stderr=str(e))

        result = CommandResult(
            argv, completed.returncode, completed.stdout or "", completed.stderr or ""
        )
        if result.output:
            logger.debug(f"Output of {display}:\n{result.output}")
        return result


def _decode(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
