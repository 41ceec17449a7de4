"""Scratch directories for clones.

Each invocation clones into uniquely named directories below a scratch
root and removes them when the flow ends, whether it succeeded or not.
The unique part of the name comes from an injected generator so tests can
predict the paths.
"""

import logging
import shutil
import tempfile
import time
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def default_scratch_id() -> str:
    """Millisecond timestamp plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


class WorkspaceManager:
    """Allocates and removes per-invocation scratch directories."""

    def __init__(
        self,
        root: str | Path | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        """Initialize workspace manager.

        Args:
            root: Directory scratch directories are created in (system temp
                dir when None)
            id_factory: Returns the unique part of each directory name
        """
        self.root = Path(root) if root else Path(tempfile.gettempdir())
        self.id_factory = id_factory or default_scratch_id

    def allocate(self, prefix: str) -> Path:
        """Return a fresh, not yet existing path ``<root>/<prefix>-<id>``.

        Raises:
            FileExistsError: If the generated path is already taken
        """
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / f"{prefix}-{self.id_factory()}"
        if path.exists():
            raise FileExistsError(f"Scratch directory already exists: {path}")
        return path

    def release(self, path: Path) -> None:
        """Remove a scratch directory, logging instead of raising on failure."""
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
            logger.debug(f"Removed scratch directory {path}")
        except OSError as e:
            logger.warning(f"Could not remove scratch directory {path}: {e}")

    @contextmanager
    def scratch(self, prefix: str) -> Iterator[Path]:
        """Allocate a scratch path for the duration of a ``with`` block."""
        path = self.allocate(prefix)
        try:
            yield path
        finally:
            self.release(path)
