"""Unit tests for scratch directory management."""

import logging
import re
from unittest.mock import patch

import pytest

from preview_bot.workers.preview.workspace import WorkspaceManager, default_scratch_id


class TestWorkspaceManager:
    """Tests for WorkspaceManager."""

    def test_allocate_uses_prefix_and_id(self, workspace, tmp_path):
        path = workspace.allocate("preview")

        assert path == tmp_path / "scratch" / "preview-1"
        assert not path.exists()

    def test_allocate_refuses_existing_path(self, tmp_path):
        (tmp_path / "preview-same").mkdir()
        manager = WorkspaceManager(tmp_path, id_factory=lambda: "same")

        with pytest.raises(FileExistsError):
            manager.allocate("preview")

    def test_scratch_removed_after_block(self, workspace):
        """
        Why: Scratch clones must not accumulate across invocations
        What: Tests the directory is removed when the block exits
        How: Creates content inside the scratch path
        """
        with workspace.scratch("preview") as path:
            path.mkdir()
            (path / "file.html").write_text("x", encoding="utf-8")

        assert not path.exists()

    def test_scratch_removed_on_error(self, workspace):
        with pytest.raises(RuntimeError):
            with workspace.scratch("preview") as path:
                path.mkdir()
                raise RuntimeError("boom")

        assert not path.exists()

    def test_release_failure_is_logged(self, workspace, caplog):
        path = workspace.allocate("preview")
        path.mkdir()

        with (
            patch("shutil.rmtree", side_effect=OSError("busy")),
            caplog.at_level(logging.WARNING),
        ):
            workspace.release(path)

        assert "Could not remove scratch directory" in caplog.text

    def test_default_root_is_temp_dir(self):
        manager = WorkspaceManager()

        assert manager.root.is_dir()

    def test_default_scratch_id_unique(self):
        first, second = default_scratch_id(), default_scratch_id()

        assert re.fullmatch(r"\d+-[0-9a-f]{8}", first)
        assert first != second
