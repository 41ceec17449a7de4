"""Unit tests for the preview publisher."""

from pathlib import PurePosixPath

import pytest

from preview_bot.config.models import ArtifactBase
from preview_bot.exceptions import PublishFailedError
from preview_bot.git import GitClient
from preview_bot.models.enums import RunOutcome
from preview_bot.models.preview import ArtifactSet, PreviewPath
from preview_bot.workers.preview.publisher import PreviewPublisher
from tests.fixtures import HEAD_SHA

PREVIEW_URL = "https://token@github.com/acme/previews.git"


def snapshot_into(store):
    """``git add`` effect that records the files present in the clone."""

    def effect(argv, cwd):
        store.update(
            {
                p.relative_to(cwd).as_posix(): p.read_text(encoding="utf-8")
                for p in cwd.rglob("*")
                if p.is_file()
            }
        )

    return effect


@pytest.fixture
def artifacts(tmp_path):
    tree = tmp_path / "source"
    for rel in ("dist/index.html", "dist/guide/intro.html"):
        path = tree / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"<p>{rel}</p>", encoding="utf-8")
    return ArtifactSet(
        working_tree=tree,
        candidate="dist",
        files=(PurePosixPath("guide/intro.html"), PurePosixPath("index.html")),
    )


@pytest.fixture
def publisher(fake_runner, workspace):
    return PreviewPublisher(GitClient(fake_runner), workspace, PREVIEW_URL)


class TestPreviewPublisher:
    """Tests for PreviewPublisher.publish."""

    def test_publishes_into_slot(self, publisher, fake_runner, artifacts, workspace):
        """
        Why: A generation run must place artifacts at {repo}/{pr} and push them
        What: Tests copy layout, commit message and the git call sequence
        How: Snapshots the clone at staging time and inspects recorded calls
        """
        staged = {}
        fake_runner.on("git", "add", effect=snapshot_into(staged))

        outcome = publisher.publish(artifacts, PreviewPath("docs-site", 42), HEAD_SHA)

        assert outcome is RunOutcome.PUBLISHED
        assert staged == {
            "docs-site/42/index.html": "<p>dist/index.html</p>",
            "docs-site/42/guide/intro.html": "<p>dist/guide/intro.html</p>",
        }
        clone_dir = str(workspace.root / "preview-repo-1")
        assert fake_runner.commands == [
            ("git", "clone", PREVIEW_URL, clone_dir),
            ("git", "config", "user.name", "GitHub Actions"),
            ("git", "config", "user.email", "actions@github.com"),
            ("git", "add", "-A", "--", "docs-site/42"),
            ("git", "diff", "--cached", "--quiet"),
            ("git", "commit", "-m", "Update preview for docs-site#42 (abc1234)"),
            ("git", "push", "origin", "main"),
        ]

    def test_mirrors_from_working_tree(self, fake_runner, workspace, artifacts):
        staged = {}
        fake_runner.on("git", "add", effect=snapshot_into(staged))
        publisher = PreviewPublisher(
            GitClient(fake_runner),
            workspace,
            PREVIEW_URL,
            relative_to=ArtifactBase.WORKING_TREE,
        )

        publisher.publish(artifacts, PreviewPath("docs-site", 42), HEAD_SHA)

        assert set(staged) == {
            "docs-site/42/dist/index.html",
            "docs-site/42/dist/guide/intro.html",
        }

    def test_unchanged_content_is_not_committed(
        self, publisher, fake_runner, artifacts
    ):
        """
        Why: Re-running a generation with identical output must be idempotent
        What: Tests that nothing staged yields UNCHANGED with no commit or push
        How: Scripts git diff --cached --quiet to report no difference
        """
        fake_runner.on("git", "diff", "--cached", "--quiet", returncode=0)

        outcome = publisher.publish(artifacts, PreviewPath("docs-site", 42), HEAD_SHA)

        assert outcome is RunOutcome.UNCHANGED
        assert not fake_runner.called("git", "commit")
        assert not fake_runner.called("git", "push")

    def test_custom_push_branch(self, fake_runner, workspace, artifacts):
        publisher = PreviewPublisher(
            GitClient(fake_runner), workspace, PREVIEW_URL, push_branch="gh-pages"
        )

        publisher.publish(artifacts, PreviewPath("docs-site", 42), HEAD_SHA)

        assert fake_runner.commands[-1] == ("git", "push", "origin", "gh-pages")

    @pytest.mark.parametrize(
        "failing, step",
        [(("git", "clone"), "clone_preview"), (("git", "commit"), "commit")],
    )
    def test_git_failure_raises(
        self, publisher, fake_runner, artifacts, failing, step
    ):
        fake_runner.on(*failing, returncode=128, stderr="fatal: boom")

        with pytest.raises(PublishFailedError) as exc_info:
            publisher.publish(artifacts, PreviewPath("docs-site", 42), HEAD_SHA)

        assert exc_info.value.step == step
        assert exc_info.value.repository == "docs-site"
        assert exc_info.value.pr_number == 42
        assert not fake_runner.called("git", "push")

    def test_push_rejection_raises(self, publisher, fake_runner, artifacts):
        """
        Why: A rejected push means the preview was not updated
        What: Tests push failure is fatal and reports the push step
        How: Scripts git push to fail
        """
        fake_runner.on("git", "push", returncode=1, stderr="rejected")

        with pytest.raises(PublishFailedError, match="during push") as exc_info:
            publisher.publish(artifacts, PreviewPath("docs-site", 42), HEAD_SHA)

        assert exc_info.value.step == "push"
        assert "token" not in str(exc_info.value)

    def test_scratch_clone_removed(self, publisher, artifacts, workspace):
        publisher.publish(artifacts, PreviewPath("docs-site", 42), HEAD_SHA)

        assert list(workspace.root.iterdir()) == []
