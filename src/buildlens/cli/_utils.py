"""Shared helpers for CLI commands."""
from __future__ import annotations

import argparse
from pathlib import Path

from buildlens.core.exceptions import WorkspaceNotFoundError
from buildlens.core.paths import WorkspaceRootResolver, resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from args or auto-detect.

    Args:
        args: Parsed arguments with optional repo_root attribute

    Returns:
        Path: Repository root path
    """
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def require_workspace_root(path: str | Path, resolver: WorkspaceRootResolver | None = None) -> Path:
    """Return the workspace root owning ``path``.

    Raises:
        WorkspaceNotFoundError: When no ancestor directory carries a marker.
    """
    absolute = Path(path).absolute()
    resolver = resolver if resolver is not None else WorkspaceRootResolver.for_document(absolute)
    root = resolver.resolve(absolute)
    if root is None:
        raise WorkspaceNotFoundError(
            f"{absolute} is not in a Bazel workspace",
            context={"path": str(absolute), "markers": list(resolver.markers)},
        )
    return root


__all__ = ["get_repo_root", "require_workspace_root"]
