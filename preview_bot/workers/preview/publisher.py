"""Publishes located artifacts into the preview repository."""

import logging
import shutil

from ...config.models import ArtifactBase
from ...exceptions import PublishFailedError
from ...git.client import GitClient
from ...git.exceptions import GitCommandError
from ...models.enums import RunOutcome
from ...models.preview import ArtifactSet, PreviewPath
from .workspace import WorkspaceManager

logger = logging.getLogger(__name__)


class PreviewPublisher:
    """Copies artifacts to ``{repo}/{pr}`` in a preview clone, then commits and pushes.

    Re-running with unchanged artifacts stages nothing; that is reported as
    ``RunOutcome.UNCHANGED`` and no commit or push is made.
    """

    def __init__(
        self,
        git: GitClient,
        workspace: WorkspaceManager,
        preview_repo_url: str,
        push_branch: str = "main",
        relative_to: ArtifactBase = ArtifactBase.CANDIDATE,
    ):
        """Initialize preview publisher.

        Args:
            git: Git client used for clone, commit and push
            workspace: Allocates the preview clone directory
            preview_repo_url: Clone URL of the preview repository
                (credentials included where needed)
            push_branch: Branch to push to
            relative_to: Directory artifact paths are mirrored from
        """
        self.git = git
        self.workspace = workspace
        self.preview_repo_url = preview_repo_url
        self.push_branch = push_branch
        self.relative_to = relative_to

    def publish(
        self, artifacts: ArtifactSet, preview_path: PreviewPath, head_sha: str
    ) -> RunOutcome:
        """Publish ``artifacts`` into ``preview_path``.

        Args:
            artifacts: Files found by the artifact locator
            preview_path: Target slot in the preview repository
            head_sha: Source commit, quoted in the commit message

        Returns:
            PUBLISHED when a commit was pushed, UNCHANGED when the preview
            already had identical content

        Raises:
            PublishFailedError: If any clone, copy, commit or push step fails
        """
        with self.workspace.scratch("preview-repo") as tree:
            step = "clone_preview"
            try:
                self.git.clone(self.preview_repo_url, tree)

                step = "copy"
                logger.info(f"Copying {len(artifacts)} files to {preview_path}...")
                target_dir = preview_path.resolve_in(tree)
                target_dir.mkdir(parents=True, exist_ok=True)
                for source, relative in artifacts.placements(self.relative_to):
                    target_file = target_dir / relative
                    target_file.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copyfile(source, target_file)
                    logger.debug(f"Copied: {relative}")

                step = "commit"
                self.git.configure_identity(tree)
                self.git.stage(tree, str(preview_path))
                if not self.git.has_staged_changes(tree):
                    logger.info("No changes to commit.")
                    return RunOutcome.UNCHANGED

                self.git.commit(
                    tree,
                    f"Update preview for {preview_path.repo_name}"
                    f"#{preview_path.pr_number} ({head_sha[:7]})",
                )

                step = "push"
                self.git.push(tree, self.push_branch)
            except (GitCommandError, OSError) as e:
                raise PublishFailedError(
                    f"Publishing preview {preview_path} failed during {step}: {e}",
                    repository=preview_path.repo_name,
                    pr_number=preview_path.pr_number,
                    step=step,
                ) from e

        logger.info("Preview updated successfully!")
        return RunOutcome.PUBLISHED
