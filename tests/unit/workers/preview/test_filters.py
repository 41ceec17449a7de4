"""Unit tests for the monitored repository filter."""

import logging

from preview_bot.workers.preview.filters import RepositoryFilter


class TestRepositoryFilter:
    def test_monitored(self):
        assert RepositoryFilter(["docs-site"]).is_monitored("docs-site")

    def test_unmonitored_is_logged(self, caplog):
        with caplog.at_level(logging.INFO):
            assert not RepositoryFilter(["docs-site"]).is_monitored("random-repo")

        assert "Repository random-repo is not in monitored list" in caplog.text

    def test_exact_match_only(self):
        """Names are compared exactly, not by prefix or case-insensitively."""
        repo_filter = RepositoryFilter(["docs-site"])

        assert not repo_filter.is_monitored("docs")
        assert not repo_filter.is_monitored("Docs-Site")

    def test_empty_allow_list_skips_everything(self, caplog):
        with caplog.at_level(logging.WARNING):
            repo_filter = RepositoryFilter([])

        assert not repo_filter.is_monitored("docs-site")
        assert "No monitored repositories configured" in caplog.text
