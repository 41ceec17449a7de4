"""Git command-line integration."""

from .client import GitClient, build_clone_url
from .exceptions import GitCommandError

__all__ = ["GitClient", "GitCommandError", "build_clone_url"]
