"""Preview generation and cleanup flows.

Flow:
    Repository filter -> Lifecycle router
        -> Build discovery -> Artifact locator -> Preview publisher
        -> Preview remover
"""

from .artifacts import ArtifactLocator
from .build import (
    BuildDiscovery,
    BuildResult,
    BuildStrategy,
    CommandStrategy,
    ScriptStrategy,
)
from .filters import RepositoryFilter
from .orchestrator import PreviewOrchestrator, RunResult
from .publisher import PreviewPublisher
from .remover import PreviewRemover
from .workspace import WorkspaceManager

__all__ = [
    "ArtifactLocator",
    "BuildDiscovery",
    "BuildResult",
    "BuildStrategy",
    "CommandStrategy",
    "PreviewOrchestrator",
    "PreviewPublisher",
    "PreviewRemover",
    "RepositoryFilter",
    "RunResult",
    "ScriptStrategy",
    "WorkspaceManager",
]
