"""Command-line entry point.

Handles one pull request event and exits:

    preview-bot [EVENT_JSON] [--config PATH] [--event-file PATH] [--log-level LEVEL]

The event is taken from GITHUB_EVENT_PAYLOAD, the positional argument or
--event-file, in that order. Exit status is 0 for success and for
intentional skips, 1 for any fatal condition.
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from .config.exceptions import ConfigurationError
from .config.loader import load_config
from .config.settings import RuntimeSettings
from .config.utils import get_config_summary
from .exceptions import MalformedEventError, PreviewBotError
from .models.event import load_event_payload, parse_event
from .runner import CommandRunner, SubprocessCommandRunner
from .workers.preview.orchestrator import PreviewOrchestrator
from .workers.preview.workspace import WorkspaceManager

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="preview-bot",
        description="Publish or remove pull request documentation previews",
    )
    parser.add_argument(
        "event", nargs="?", default=None, help="JSON-encoded pull request event"
    )
    parser.add_argument("--config", help="Configuration file path (JSON or YAML)")
    parser.add_argument("--event-file", help="Read the event JSON from this file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log level (defaults to system.log_level from the configuration)",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    runner: CommandRunner | None = None,
    settings: RuntimeSettings | None = None,
    workspace: WorkspaceManager | None = None,
) -> int:
    """Run the bot for one event and return the process exit status.

    Args:
        argv: Command-line arguments (``sys.argv[1:]`` when None)
        runner: Process collaborator (subprocess-backed when None)
        settings: Environment settings (read from the environment when None)
        workspace: Scratch directory manager (from configuration when None)
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=args.log_level or logging.INFO, format=LOG_FORMAT)
    if args.log_level:
        logging.getLogger().setLevel(args.log_level)

    try:
        settings = settings or RuntimeSettings()

        config = load_config(args.config)
        if not args.log_level:
            logging.getLogger().setLevel(config.system.log_level.value)
        logger.debug(f"Configuration: {get_config_summary(config)}")

        payload = load_event_payload(
            env_payload=settings.event_payload,
            argument=args.event,
            event_file=args.event_file,
        )
        event = parse_event(payload)

        orchestrator = PreviewOrchestrator(
            config,
            runner or SubprocessCommandRunner(timeout=config.system.command_timeout),
            token=settings.resolve_token(),
            workspace=workspace,
        )
        result = orchestrator.handle(event)

    except MalformedEventError as e:
        logger.error(f"Missing or invalid event payload: {e}")
        return EXIT_FAILURE
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_FAILURE
    except PreviewBotError as e:
        logger.error(f"{type(e).__name__} [{e.context}]: {e}")
        return EXIT_FAILURE
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return EXIT_FAILURE

    logger.info(f"Finished: {result.outcome.value}")
    return EXIT_SUCCESS


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
