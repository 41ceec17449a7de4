"""Helpers for logging configuration and URLs without leaking secrets."""

from typing import Any
from urllib.parse import urlsplit, urlunsplit

from .models import Config


def redact_url(url: str) -> str:
    """Replace credentials embedded in a URL with ``***``.

    ``https://ghp_abc@github.com/o/r.git`` becomes
    ``https://***@github.com/o/r.git``. URLs without credentials are
    returned unchanged.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    if "@" not in parts.netloc:
        return url

    host = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit(parts._replace(netloc=f"***@{host}"))


def get_config_summary(config: Config) -> dict[str, Any]:
    """Get a summary of the configuration for logging.

    Args:
        config: Configuration to summarize

    Returns:
        Dictionary with the settings that shape a run
    """
    return {
        "monitored_repositories": list(config.monitored_repositories),
        "preview_repository": config.preview_repository.full_name,
        "git": {
            "base_url": redact_url(config.git.base_url),
            "push_branch": config.git.push_branch,
        },
        "build_strategies": [s.target for s in config.build.strategies],
        "artifact_directories": list(config.artifacts.directories),
        "artifact_extension": config.artifacts.extension,
        "command_timeout": config.system.command_timeout,
    }
