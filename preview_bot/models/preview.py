"""Value objects for preview locations and discovered artifacts."""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ..config.models import ArtifactBase


@dataclass(frozen=True)
class PreviewPath:
    """Deterministic ``{repo_name}/{pr_number}`` slot in the preview repository.

    Publisher and Remover build this from the same two values, so a
    cleanup always targets the slot a generation created.
    """

    repo_name: str
    pr_number: int

    def __post_init__(self) -> None:
        """Validate that the slot stays a two-segment relative path."""
        if not self.repo_name or self.repo_name in (".", ".."):
            raise ValueError(f"Invalid repository name: {self.repo_name!r}")
        if "/" in self.repo_name or "\\" in self.repo_name:
            raise ValueError(
                f"Repository name contains a separator: {self.repo_name!r}"
            )
        if self.pr_number < 1:
            raise ValueError(f"PR number must be positive: {self.pr_number}")

    def __str__(self) -> str:
        """Return the slot as a POSIX path string."""
        return f"{self.repo_name}/{self.pr_number}"

    @property
    def relative(self) -> PurePosixPath:
        """Slot as a relative POSIX path."""
        return PurePosixPath(self.repo_name, str(self.pr_number))

    def resolve_in(self, root: Path) -> Path:
        """Absolute location of the slot inside a preview working tree."""
        return root / self.repo_name / str(self.pr_number)


@dataclass(frozen=True)
class ArtifactSet:
    """Ordered artifacts found below one candidate directory.

    ``files`` are relative to ``source_dir``; ``candidate`` is the
    candidate directory relative to the working tree (``"."`` for the root).
    """

    working_tree: Path
    candidate: str
    files: tuple[PurePosixPath, ...]

    def __len__(self) -> int:
        return len(self.files)

    @property
    def source_dir(self) -> Path:
        """Absolute path of the candidate directory."""
        return self.working_tree / self.candidate

    def placements(
        self, relative_to: ArtifactBase = ArtifactBase.CANDIDATE
    ) -> list[tuple[Path, PurePosixPath]]:
        """Pair each artifact's absolute source with its path below the slot.

        Args:
            relative_to: Mirror from the candidate directory or from the
                working-tree root

        Returns:
            ``(source_file, relative_destination)`` tuples, in artifact order
        """
        prefix = PurePosixPath(self.candidate)
        result = []
        for rel in self.files:
            if relative_to == ArtifactBase.WORKING_TREE:
                destination = prefix / rel
            else:
                destination = rel
            result.append((self.source_dir / rel, destination))
        return result
