"""Build discovery.

Source repositories use all kinds of documentation tooling, so instead of
per-repository configuration the bot tries a fixed, ordered list of build
strategies and stops at the first one that succeeds:

- ``ScriptStrategy``: a shell script at a relative path. Only attempted if
  the file exists; it is made executable right before running, and a
  script without a ``#!`` line is run with ``sh``.
- ``CommandStrategy``: a tooling command such as ``npm run build-docs``.
  Always attempted; a failure just moves on to the next candidate.

Running out of candidates is not an error. Pre-built output may already be
in the tree, and the artifact locator decides whether there is anything to
publish.
"""

import logging
import os
import shlex
import stat
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from ...config.models import BuildConfig, BuildStrategyConfig, StrategyKind
from ...exceptions import BuildStrategyFailed
from ...runner import CommandRunner

logger = logging.getLogger(__name__)

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class BuildStrategy(ABC):
    """One way of producing documentation output from a working tree."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable name used in logs."""
        pass

    def is_applicable(self, tree: Path) -> bool:
        """Whether this strategy should be attempted for ``tree``."""
        return True

    @abstractmethod
    def attempt(self, tree: Path, runner: CommandRunner) -> None:
        """Run the strategy.

        Raises:
            BuildStrategyFailed: If the build did not succeed
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"


class ScriptStrategy(BuildStrategy):
    """Run a script shipped in the source repository."""

    def __init__(self, path: str):
        self.path = PurePosixPath(path)

    @property
    def description(self) -> str:
        return str(self.path)

    def is_applicable(self, tree: Path) -> bool:
        return (tree / self.path).is_file()

    def attempt(self, tree: Path, runner: CommandRunner) -> None:
        script = tree / self.path
        try:
            mode = script.stat().st_mode
            os.chmod(script, mode | EXECUTE_BITS)
            with open(script, "rb") as f:
                has_interpreter_line = f.read(2) == b"#!"
        except OSError as e:
            raise BuildStrategyFailed(
                f"Cannot prepare {self.path} for running: {e}",
                strategy=self.description,
            ) from e

        argv: tuple[str, ...] = (f"./{self.path}",)
        if not has_interpreter_line:
            # The kernel refuses to exec these; a shell runs them as sh scripts
            argv = ("sh", *argv)
        result = runner.run(argv, cwd=tree)
        if not result.ok:
            raise BuildStrategyFailed(
                f"{self.path} exited with status {result.returncode}",
                strategy=self.description,
                returncode=result.returncode,
            )


class CommandStrategy(BuildStrategy):
    """Run a tooling command in the working tree."""

    def __init__(self, command: str):
        self.command = command
        self.argv = tuple(shlex.split(command))

    @property
    def description(self) -> str:
        return self.command

    def attempt(self, tree: Path, runner: CommandRunner) -> None:
        result = runner.run(self.argv, cwd=tree)
        if not result.ok:
            raise BuildStrategyFailed(
                f"'{self.command}' exited with status {result.returncode}",
                strategy=self.description,
                returncode=result.returncode,
            )


def strategy_from_config(config: BuildStrategyConfig) -> BuildStrategy:
    """Create the strategy variant described by a config entry."""
    if config.kind == StrategyKind.SCRIPT:
        return ScriptStrategy(config.target)
    return CommandStrategy(config.target)


@dataclass
class BuildResult:
    """Outcome of build discovery."""

    strategy: str | None = None
    attempted: list[str] = field(default_factory=list)
    failures: list[BuildStrategyFailed] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """Whether some strategy completed successfully."""
        return self.strategy is not None


class BuildDiscovery:
    """Tries build strategies in order until one succeeds."""

    def __init__(self, strategies: Sequence[BuildStrategy], runner: CommandRunner):
        self.strategies = list(strategies)
        self.runner = runner

    @classmethod
    def from_config(
        cls, config: BuildConfig, runner: CommandRunner
    ) -> "BuildDiscovery":
        """Build the strategy list from configuration."""
        return cls([strategy_from_config(s) for s in config.strategies], runner)

    def run(self, tree: Path) -> BuildResult:
        """Attempt each applicable strategy until one succeeds.

        Never raises for failed builds; see ``BuildResult.succeeded``.
        """
        logger.info("Looking for build script...")
        result = BuildResult()

        for strategy in self.strategies:
            if not strategy.is_applicable(tree):
                logger.debug(f"Skipping {strategy.description}: not present")
                continue

            logger.info(f"Trying: {strategy.description}")
            result.attempted.append(strategy.description)
            try:
                strategy.attempt(tree, self.runner)
            except BuildStrategyFailed as e:
                logger.info(f"Build strategy failed, trying next: {e}")
                result.failures.append(e)
                continue

            logger.info(f"Build succeeded with {strategy.description}")
            result.strategy = strategy.description
            return result

        logger.warning(
            "No build script succeeded. Looking for HTML files in common directories..."
        )
        return result
