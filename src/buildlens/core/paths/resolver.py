"""Workspace root resolution for Bazel BUILD files.

A directory is a workspace root when it directly contains one of the root
marker files (``WORKSPACE`` by default). Resolution walks from the directory
of a file towards the filesystem root and returns the first (innermost)
directory that carries a marker.

Key features:
- Innermost-first: a nested workspace wins over an enclosing one
- Read-only existence checks; a failing check counts as "absent"
- Bounded walk with an explicit iteration cap
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .project import get_project_config_dir, get_user_config_dir

logger = logging.getLogger(__name__)

DEFAULT_MARKERS: tuple[str, ...] = ("WORKSPACE", "WORKSPACE.bazel", "MODULE.bazel")
DEFAULT_MAX_DEPTH = 256

PROJECT_ROOT_ENV = "BUILDLENS_PROJECT_ROOT"


class WorkspaceRootResolver:
    """Find the Bazel workspace directory that owns a file.

    Examples:
        >>> resolver = WorkspaceRootResolver()
        >>> resolver.resolve("/repo/pkg/BUILD")
        PosixPath('/repo')
    """

    def __init__(
        self,
        markers: Iterable[str] = DEFAULT_MARKERS,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.markers: tuple[str, ...] = tuple(str(m) for m in markers if str(m).strip())
        if not self.markers:
            raise ValueError("at least one workspace marker filename is required")
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.max_depth = int(max_depth)

    @classmethod
    def from_config(cls, repo_root: Optional[Path] = None) -> "WorkspaceRootResolver":
        """Build a resolver from ``workspace.markers`` / ``workspace.max_depth``."""
        from buildlens.core.config.domains.workspace import WorkspaceConfig

        cfg = WorkspaceConfig(repo_root=repo_root)
        return cls(cfg.markers, max_depth=cfg.max_depth)

    @classmethod
    def for_document(cls, path: str | os.PathLike[str]) -> "WorkspaceRootResolver":
        """Build a resolver from the configuration governing the file at ``path``.

        Markers come from the project configuration found at or above the
        file's directory (see :func:`resolve_project_root`), so a nested
        directory carrying only a marker file does not shadow it.
        """
        directory = Path(os.path.dirname(os.path.abspath(os.fspath(path))))
        return cls.from_config(resolve_project_root(directory))

    def has_marker(self, directory: str) -> bool:
        """Return True when ``directory`` directly contains a marker file."""
        for marker in self.markers:
            candidate = os.path.join(directory, marker)
            try:
                if os.path.exists(candidate):
                    return True
            except (OSError, ValueError):
                # Unreadable candidates are treated as absent.
                continue
        return False

    def resolve_directory(self, directory: str | os.PathLike[str]) -> Optional[Path]:
        """Walk up from ``directory`` (inclusive) and return the first root."""
        current = os.path.abspath(os.fspath(directory))
        for _ in range(self.max_depth):
            if self.has_marker(current):
                logger.debug("workspace root found: %s", current)
                return Path(current)
            parent = os.path.dirname(current)
            if parent == current:
                logger.debug("no workspace marker %s above %s", self.markers, directory)
                return None
            current = parent

        logger.debug("workspace search from %s stopped after %d levels", directory, self.max_depth)
        return None

    def resolve(self, path: str | os.PathLike[str]) -> Optional[Path]:
        """Return the workspace root for the file at ``path``, or None.

        The search starts at the directory containing ``path``.
        """
        absolute = os.path.abspath(os.fspath(path))
        return self.resolve_directory(os.path.dirname(absolute))


def find_workspace_root(
    path: str | os.PathLike[str],
    markers: Sequence[str] = DEFAULT_MARKERS,
) -> Optional[Path]:
    """Return the innermost workspace root for a file, or None."""
    return WorkspaceRootResolver(markers).resolve(path)


def _find_config_root(base: Path) -> Optional[Path]:
    """Return the nearest ancestor of ``base`` holding a project config layer."""
    user_dir = get_user_config_dir()
    current = base
    for _ in range(DEFAULT_MAX_DEPTH):
        config_dir = get_project_config_dir(current)
        if not config_dir.is_relative_to(current):
            # An absolute BUILDLENS_PROJECT_CONFIG_DIR is the same for every directory.
            return None
        try:
            is_user_dir = config_dir.resolve() == user_dir
            if not is_user_dir and (
                (config_dir / "config").is_dir() or (config_dir / "config.local").is_dir()
            ):
                return current
        except (OSError, ValueError):
            pass
        parent = current.parent
        if parent == current:
            return None
        current = parent
    return None


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root used for configuration lookup.

    Resolution priority:
    1. ``BUILDLENS_PROJECT_ROOT`` environment variable
    2. Nearest directory above ``start`` (default: current directory) with a
       ``.buildlens/config`` or ``.buildlens/config.local`` layer; the user
       config directory in the home directory does not count
    3. Innermost workspace root above ``start`` (default markers)
    4. ``start`` itself

    Unlike code lens composition this never fails: a directory outside any
    workspace still gets bundled and user configuration.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        return Path(env_root).expanduser().resolve()

    base = Path(start) if start is not None else Path.cwd()
    base = base.expanduser().absolute()
    configured = _find_config_root(base)
    if configured is not None:
        return configured
    found = WorkspaceRootResolver().resolve_directory(base)
    return found if found is not None else base


__all__ = [
    "DEFAULT_MARKERS",
    "DEFAULT_MAX_DEPTH",
    "PROJECT_ROOT_ENV",
    "WorkspaceRootResolver",
    "find_workspace_root",
    "resolve_project_root",
]
