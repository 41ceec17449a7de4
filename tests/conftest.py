"""
Test configuration and fixtures for the preview bot tests.

Provides sample events, a minimal configuration, a recording command
runner and a scratch workspace with predictable directory names.
"""

import itertools
import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from preview_bot.config.models import Config
from preview_bot.workers.preview.workspace import WorkspaceManager
from tests.fixtures import FakeCommandRunner, make_event_payload


@pytest.fixture
def event_payload() -> dict[str, Any]:
    """
    Why: Most tests need a well-formed "opened" event for a monitored repo
    What: Provides an "opened" payload for docs-site PR #42
    How: Builds a dict shaped like GitHub's pull_request webhook payload
    """
    return make_event_payload()


@pytest.fixture
def config_data() -> dict[str, Any]:
    """Raw configuration as it would appear in config.json."""
    return {
        "monitoredRepositories": ["docs-site", "handbook"],
        "previewRepository": {"owner": "acme", "name": "previews"},
    }


@pytest.fixture
def config(config_data: dict[str, Any]) -> Config:
    """Validated configuration built from ``config_data``."""
    return Config(**config_data)


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    """Recording command runner with default git behaviour."""
    return FakeCommandRunner()


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceManager:
    """
    Why: Tests need to know where scratch clones end up
    What: Provides a WorkspaceManager rooted in tmp_path with counter ids
    How: Injects an itertools counter as the id factory
    """
    counter = itertools.count(1)
    return WorkspaceManager(tmp_path / "scratch", id_factory=lambda: str(next(counter)))


@pytest.fixture
def clean_env():
    """Remove the bot's environment variables for the duration of a test."""
    names = (
        "GITHUB_EVENT_PAYLOAD",
        "PREVIEW_REPO_TOKEN",
        "GITHUB_TOKEN",
        "PREVIEW_BOT_CONFIG_PATH",
    )
    env = {k: v for k, v in os.environ.items() if k not in names}
    with patch.dict(os.environ, env, clear=True):
        yield
