"""Allow-list check for source repositories."""

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class RepositoryFilter:
    """Decides whether a source repository gets previews."""

    def __init__(self, monitored_repositories: Iterable[str]):
        self.monitored = frozenset(monitored_repositories)
        if not self.monitored:
            logger.warning(
                "No monitored repositories configured; every event is skipped"
            )

    def is_monitored(self, repository_name: str) -> bool:
        """Check the allow-list, logging when the repository is skipped."""
        if repository_name in self.monitored:
            return True
        logger.info(f"Repository {repository_name} is not in monitored list. Skipping.")
        return False
