"""buildlens configuration system.

Usage:
    from buildlens.core.config import ConfigManager
    from buildlens.core.config.domains import QueryConfig

    manager = ConfigManager(repo_root=Path("/path/to/workspace"))
    config = manager.load_config()

    query = QueryConfig(repo_root=Path("/path/to/workspace"))
    executable = query.executable
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig

from .domains import (
    WorkspaceConfig,
    QueryConfig,
    CodeLensConfig,
    TimeoutsConfig,
    LoggingConfig,
)

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "WorkspaceConfig",
    "QueryConfig",
    "CodeLensConfig",
    "TimeoutsConfig",
    "LoggingConfig",
]
