"""Path utilities for buildlens core.

This package exposes the workspace root resolver and the configuration
directory helpers.
"""

from .resolver import (  # noqa: F401
    DEFAULT_MARKERS,
    DEFAULT_MAX_DEPTH,
    WorkspaceRootResolver,
    find_workspace_root,
    resolve_project_root,
)
from .project import get_project_config_dir, get_user_config_dir  # noqa: F401

__all__ = [
    "DEFAULT_MARKERS",
    "DEFAULT_MAX_DEPTH",
    "WorkspaceRootResolver",
    "find_workspace_root",
    "resolve_project_root",
    "get_project_config_dir",
    "get_user_config_dir",
]
