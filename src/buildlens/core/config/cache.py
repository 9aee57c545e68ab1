"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys include the repo root, the ``BUILDLENS_*`` environment and
the mtimes of every layered config file, so edits are picked up without an
explicit reset.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    """Resolve repo_root to a canonical absolute Path."""
    if repo_root is None:
        from buildlens.core.paths import resolve_project_root

        return resolve_project_root()

    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(d: Path) -> list[tuple[str, int, int]]:
    from buildlens.core.utils.io import iter_yaml_files

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(d):
        try:
            st = p.stat()
            files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            files.append((p.name, 0, 0))
    return files


def _cache_key(repo_root: Path, validate: bool) -> str:
    from buildlens.core.paths import get_project_config_dir, get_user_config_dir

    base = str(repo_root)
    suffix = ":validated" if validate else ":raw"

    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith("BUILDLENS_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    project_root_dir = get_project_config_dir(repo_root)
    cfg_files = {
        "project": _fingerprint_dir(project_root_dir / "config"),
        "project_local": _fingerprint_dir(project_root_dir / "config.local"),
        "user": _fingerprint_dir(get_user_config_dir() / "config"),
    }
    cfg_fp = hashlib.sha256(repr(cfg_files).encode("utf-8")).hexdigest()[:12]

    return f"{base}{suffix}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = False) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same key, avoiding repeated
    file I/O. Treat the returned dict as immutable.

    Args:
        repo_root: Repository root path. Uses auto-detection if None.
        validate: Whether to validate against the config schema.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root, validate)

    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(repo_root=normalized_root)
        _config_cache[key] = manager._load_config_uncached(validate=validate)

    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the loaded configuration cache."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, validate: bool = False) -> bool:
    """Check if config for repo_root is cached."""
    return _cache_key(_normalize_repo_root(repo_root), validate) in _config_cache


__all__ = [
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
]
