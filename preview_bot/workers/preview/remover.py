"""Removes a pull request's preview from the preview repository."""

import logging
import shutil

from ...exceptions import CleanupFailedError
from ...git.client import GitClient
from ...git.exceptions import GitCommandError
from ...models.enums import RunOutcome
from ...models.preview import PreviewPath
from .workspace import WorkspaceManager

logger = logging.getLogger(__name__)


class PreviewRemover:
    """Deletes ``{repo}/{pr}`` from a preview clone, then commits and pushes.

    A slot that was never published is a no-op: nothing is deleted,
    committed or pushed.
    """

    def __init__(
        self,
        git: GitClient,
        workspace: WorkspaceManager,
        preview_repo_url: str,
        push_branch: str = "main",
    ):
        self.git = git
        self.workspace = workspace
        self.preview_repo_url = preview_repo_url
        self.push_branch = push_branch

    def remove(self, preview_path: PreviewPath) -> RunOutcome:
        """Remove ``preview_path`` from the preview repository.

        Returns:
            REMOVED when a removal commit was pushed, NOTHING_TO_REMOVE when
            the slot did not exist or held no tracked files

        Raises:
            CleanupFailedError: If any clone, delete, commit or push step fails
        """
        with self.workspace.scratch("preview-repo-cleanup") as tree:
            step = "clone_preview"
            try:
                self.git.clone(self.preview_repo_url, tree)

                target = preview_path.resolve_in(tree)
                if not target.exists():
                    logger.info(
                        f"Preview folder {preview_path} does not exist. "
                        "Nothing to clean up."
                    )
                    return RunOutcome.NOTHING_TO_REMOVE

                step = "delete"
                logger.info(f"Deleting {preview_path}...")
                if target.is_dir():
                    shutil.rmtree(target)
                else:
                    target.unlink()

                step = "commit"
                self.git.configure_identity(tree)
                self.git.stage(tree, str(preview_path))
                if not self.git.has_staged_changes(tree):
                    logger.info("No changes to commit.")
                    return RunOutcome.NOTHING_TO_REMOVE

                self.git.commit(
                    tree,
                    f"Remove preview for {preview_path.repo_name}"
                    f"#{preview_path.pr_number}",
                )

                step = "push"
                self.git.push(tree, self.push_branch)
            except (GitCommandError, OSError) as e:
                raise CleanupFailedError(
                    f"Removing preview {preview_path} failed during {step}: {e}",
                    repository=preview_path.repo_name,
                    pr_number=preview_path.pr_number,
                    step=step,
                ) from e

        logger.info("Preview cleanup completed!")
        return RunOutcome.REMOVED
