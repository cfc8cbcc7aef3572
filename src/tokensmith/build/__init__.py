"""
Multi-platform build orchestration.
"""

from .orchestrator import (
    BuildOrchestrator,
    BuildResult,
    BuildStatus,
    PlatformResult,
    write_artifact,
)

__all__ = [
    "BuildOrchestrator",
    "BuildResult",
    "BuildStatus",
    "PlatformResult",
    "write_artifact",
]
