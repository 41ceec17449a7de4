"""Artifact location.

Candidate output directories are searched in order. The first directory
that contains at least one matching file wins; later candidates are never
looked at, even if they hold more files.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from ...config.models import ArtifactsConfig
from ...exceptions import ArtifactsNotFoundError
from ...models.preview import ArtifactSet

logger = logging.getLogger(__name__)

SKIPPED_DIRECTORIES = frozenset({".git"})


class ArtifactLocator:
    """Finds generated markup files below a working tree."""

    def __init__(self, directories: Sequence[str], extension: str = ".html"):
        self.directories = list(directories)
        self.extension = extension

    @classmethod
    def from_config(cls, config: ArtifactsConfig) -> "ArtifactLocator":
        return cls(config.directories, config.extension)

    def find_files(self, directory: Path) -> list[PurePosixPath]:
        """Recursively collect matching files, sorted, relative to ``directory``."""
        found: list[PurePosixPath] = []
        for current, dirnames, filenames in os.walk(directory):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRECTORIES)
            rel_dir = Path(current).relative_to(directory)
            for name in sorted(filenames):
                if name.endswith(self.extension):
                    found.append(PurePosixPath(rel_dir.as_posix()) / name)
        return found

    def locate(self, tree: Path) -> ArtifactSet:
        """Return the artifacts of the first non-empty candidate directory.

        Raises:
            ArtifactsNotFoundError: If no candidate yields any file
        """
        for candidate in self.directories:
            directory = tree / candidate
            if not directory.is_dir():
                logger.debug(f"Candidate directory {candidate} does not exist")
                continue

            files = self.find_files(directory)
            if files:
                logger.info(
                    f"Found {len(files)} {self.extension} files in {candidate}"
                )
                return ArtifactSet(
                    working_tree=tree, candidate=candidate, files=tuple(files)
                )

        raise ArtifactsNotFoundError(
            f"No {self.extension} files found in {', '.join(self.directories)}. "
            "Build script may not have generated output.",
            step="locate",
        )
