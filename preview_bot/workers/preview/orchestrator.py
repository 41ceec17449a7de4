"""Preview lifecycle orchestration.

Maps one pull request event to the side effects it requires:

- ``opened`` / ``synchronize``: clone the source at the head commit, try
  the build strategies, locate artifacts and publish them.
- ``closed`` / ``merged``: remove the preview.
- any other action, or a repository outside the allow-list: nothing.

Runs are strictly sequential and are not locked against each other;
concurrent runs for the same pull request must be serialized upstream.
"""

import logging
from dataclasses import dataclass

from ...config.models import Config
from ...exceptions import PreviewBotError, PublishFailedError
from ...git.client import GitClient, build_clone_url
from ...git.exceptions import GitCommandError
from ...models.enums import RunOutcome
from ...models.event import PullRequestEvent
from ...models.preview import PreviewPath
from ...runner import CommandRunner
from .artifacts import ArtifactLocator
from .build import BuildDiscovery
from .filters import RepositoryFilter
from .publisher import PreviewPublisher
from .remover import PreviewRemover
from .workspace import WorkspaceManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Successful result of handling one event."""

    outcome: RunOutcome
    preview_path: PreviewPath | None = None
    artifact_count: int = 0
    build_strategy: str | None = None

    @property
    def committed(self) -> bool:
        """Whether a commit was pushed to the preview repository."""
        return self.outcome in (RunOutcome.PUBLISHED, RunOutcome.REMOVED)


class PreviewOrchestrator:
    """Routes events to the generation or cleanup flow."""

    def __init__(
        self,
        config: Config,
        runner: CommandRunner,
        token: str | None = None,
        workspace: WorkspaceManager | None = None,
    ):
        """Initialize orchestrator.

        Args:
            config: Loaded configuration
            runner: Process collaborator for git and build commands
            token: Write token for the preview repository
            workspace: Scratch directory manager (defaults to one below
                ``system.scratch_root``)
        """
        self.config = config
        self.runner = runner
        self.token = token
        self.workspace = workspace or WorkspaceManager(config.system.scratch_root)

        self.repository_filter = RepositoryFilter(config.monitored_repositories)
        self.git = GitClient(
            runner,
            committer_name=config.git.committer_name,
            committer_email=config.git.committer_email,
        )
        self.build_discovery = BuildDiscovery.from_config(config.build, runner)
        self.artifact_locator = ArtifactLocator.from_config(config.artifacts)

        preview_url = build_clone_url(
            config.git.base_url, config.preview_repository.full_name, token
        )
        self.publisher = PreviewPublisher(
            self.git,
            self.workspace,
            preview_url,
            push_branch=config.git.push_branch,
            relative_to=config.artifacts.relative_to,
        )
        self.remover = PreviewRemover(
            self.git, self.workspace, preview_url, push_branch=config.git.push_branch
        )

    def handle(self, event: PullRequestEvent) -> RunResult:
        """Handle one event.

        Returns:
            Result describing what was done, including benign skips

        Raises:
            PreviewBotError: For fatal failures, annotated with the
                repository and pull request number
        """
        if not self.repository_filter.is_monitored(event.repository.name):
            return RunResult(RunOutcome.SKIPPED_UNMONITORED)

        logger.info(f"Processing {event}")

        if not self.token and (event.action.is_generation or event.action.is_cleanup):
            logger.warning(
                "No PREVIEW_REPO_TOKEN or GITHUB_TOKEN set; "
                "cloning the preview repository without credentials"
            )

        try:
            if event.action.is_generation:
                return self.generate_preview(event)
            if event.action.is_cleanup:
                return self.cleanup_preview(event)
        except PreviewBotError as e:
            if e.repository is None:
                e.repository = event.repository.name
            if e.pr_number is None:
                e.pr_number = event.pull_request.number
            raise

        logger.info(f"Action {event.raw_action} not handled. Skipping.")
        return RunResult(RunOutcome.SKIPPED_ACTION)

    def generate_preview(self, event: PullRequestEvent) -> RunResult:
        """Build the source at the head commit and publish its artifacts."""
        preview_path = PreviewPath(event.repository.name, event.pull_request.number)
        head_sha = event.pull_request.head_sha

        with self.workspace.scratch("preview") as tree:
            source_token = (
                self.token if self.config.git.authenticate_source_clone else None
            )
            source_url = build_clone_url(
                self.config.git.base_url, event.repository.full_name, source_token
            )

            step = "clone_source"
            try:
                logger.info(
                    f"Cloning {event.repository.full_name} at commit {head_sha}..."
                )
                self.git.clone(source_url, tree)
                step = "checkout"
                self.git.checkout(tree, head_sha)
            except GitCommandError as e:
                raise PublishFailedError(
                    f"Preparing source of {event.repository.full_name} failed "
                    f"during {step}: {e}",
                    step=step,
                ) from e

            build = self.build_discovery.run(tree)
            artifacts = self.artifact_locator.locate(tree)
            outcome = self.publisher.publish(artifacts, preview_path, head_sha)

        return RunResult(
            outcome,
            preview_path=preview_path,
            artifact_count=len(artifacts),
            build_strategy=build.strategy,
        )

    def cleanup_preview(self, event: PullRequestEvent) -> RunResult:
        """Remove the preview of a closed or merged pull request."""
        preview_path = PreviewPath(event.repository.name, event.pull_request.number)
        outcome = self.remover.remove(preview_path)
        return RunResult(outcome, preview_path=preview_path)
