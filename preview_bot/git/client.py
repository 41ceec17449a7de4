"""Thin wrapper over the git command line.

Each method runs one git command through the injected ``CommandRunner``
and raises ``GitCommandError`` when it fails. Whether there is anything to
commit is answered structurally with ``git diff --cached --quiet`` rather
than by matching git's human-readable messages.
"""

import logging
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

from ..config.utils import redact_url
from ..runner import CommandResult, CommandRunner
from .exceptions import GitCommandError

logger = logging.getLogger(__name__)


def build_clone_url(base_url: str, full_name: str, token: str | None = None) -> str:
    """Build the clone URL for ``owner/name`` below ``base_url``.

    The token is embedded as URL credentials for http(s) remotes only; it
    is ignored for ``file://`` and other local remotes.

    Args:
        base_url: Host URL such as ``https://github.com``
        full_name: Repository in ``owner/name`` form
        token: Optional access token

    Returns:
        URL ending in ``.git``
    """
    url = f"{base_url.rstrip('/')}/{full_name}.git"
    if not token:
        return url

    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return url
    return urlunsplit(parts._replace(netloc=f"{token}@{parts.netloc}"))


class GitClient:
    """Runs the git operations the preview flows need."""

    def __init__(
        self,
        runner: CommandRunner,
        committer_name: str = "GitHub Actions",
        committer_email: str = "actions@github.com",
    ):
        """Initialize git client.

        Args:
            runner: Process collaborator used for every git call
            committer_name: ``user.name`` set in preview clones
            committer_email: ``user.email`` set in preview clones
        """
        self.runner = runner
        self.committer_name = committer_name
        self.committer_email = committer_email

    def _git(self, *args: str, cwd: Path | None = None) -> CommandResult:
        result = self.runner.run(("git", *args), cwd=cwd)
        if not result.ok:
            raise GitCommandError(
                f"'{result.display}' failed with exit status {result.returncode}: "
                f"{result.output or 'no output'}",
                result,
            )
        return result

    def clone(self, url: str, destination: Path) -> None:
        """Clone ``url`` into ``destination``."""
        logger.info(f"Cloning {redact_url(url)} into {destination}")
        self._git("clone", url, str(destination))

    def checkout(self, tree: Path, revision: str) -> None:
        """Check out a commit in an existing clone."""
        logger.info(f"Checking out {revision}")
        self._git("checkout", revision, cwd=tree)

    def configure_identity(self, tree: Path) -> None:
        """Set the committer identity for commits made in ``tree``."""
        self._git("config", "user.name", self.committer_name, cwd=tree)
        self._git("config", "user.email", self.committer_email, cwd=tree)

    def stage(self, tree: Path, pathspec: str) -> None:
        """Stage additions, modifications and deletions below ``pathspec``."""
        self._git("add", "-A", "--", pathspec, cwd=tree)

    def has_staged_changes(self, tree: Path) -> bool:
        """Whether the index differs from HEAD.

        Raises:
            GitCommandError: If git reports anything but "same" or "differs"
        """
        result = self.runner.run(("git", "diff", "--cached", "--quiet"), cwd=tree)
        if result.returncode == 0:
            return False
        if result.returncode == 1:
            return True
        raise GitCommandError(
            f"'{result.display}' failed with exit status {result.returncode}: "
            f"{result.output or 'no output'}",
            result,
        )

    def commit(self, tree: Path, message: str) -> None:
        """Commit the staged changes."""
        logger.info(f"Committing: {message}")
        self._git("commit", "-m", message, cwd=tree)

    def push(self, tree: Path, branch: str, remote: str = "origin") -> None:
        """Push ``branch`` to ``remote``."""
        logger.info(f"Pushing to {remote}/{branch}")
        self._git("push", remote, branch, cwd=tree)
