"""Domain-specific configuration accessors."""
from __future__ import annotations

from .workspace import WorkspaceConfig
from .query import QueryConfig
from .codelens import CodeLensConfig
from .timeouts import TimeoutsConfig
from .logging import LoggingConfig

__all__ = [
    "WorkspaceConfig",
    "QueryConfig",
    "CodeLensConfig",
    "TimeoutsConfig",
    "LoggingConfig",
]
