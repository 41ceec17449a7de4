#!/usr/bin/env python3
"""
Preview Bot Usage Examples

This module demonstrates driving the preview bot from Python: loading a
configuration, parsing a pull request event, and running the orchestrator
with either the real subprocess runner or a dry-run runner that only logs
what would be executed.
"""

import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from preview_bot.config import Config, load_config
from preview_bot.models import parse_event
from preview_bot.runner import CommandResult, CommandRunner, SubprocessCommandRunner
from preview_bot.workers.preview import PreviewOrchestrator

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class DryRunCommandRunner(CommandRunner):
    """Logs commands instead of running them.

    ``git clone`` still creates the destination directory so the flow can
    proceed; no artifacts will be found unless the directory is populated.
    """

    def run(self, args: Sequence[str], cwd: Path | None = None) -> CommandResult:
        argv = tuple(str(a) for a in args)
        logger.info(f"[dry-run] {' '.join(argv)} (cwd={cwd})")
        if argv[:2] == ("git", "clone"):
            Path(argv[-1]).mkdir(parents=True, exist_ok=True)
        return CommandResult(argv, 0)


def example_inline_config() -> Config:
    """Build a configuration without a file."""
    return Config(
        monitoredRepositories=["docs-site", "handbook"],
        previewRepository={"owner": "acme", "name": "previews"},
        git={"pushBranch": "main"},
        artifacts={"directories": ["site", "dist"], "relativeTo": "candidate"},
    )


def example_handle_event(event_path: str, dry_run: bool = True) -> int:
    """Handle one event file with the configuration found in the usual places."""
    config = load_config()
    payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    event = parse_event(payload)

    runner: CommandRunner
    if dry_run:
        runner = DryRunCommandRunner()
    else:
        runner = SubprocessCommandRunner(timeout=config.system.command_timeout)

    result = PreviewOrchestrator(config, runner).handle(event)
    logger.info(f"Outcome: {result.outcome.value} ({result.preview_path})")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(f"usage: {sys.argv[0]} EVENT_FILE [--live]")
        sys.exit(2)
    sys.exit(example_handle_event(sys.argv[1], dry_run="--live" not in sys.argv))
