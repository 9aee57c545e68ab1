"""Layered YAML loading.

Deterministic iteration of YAML files in a directory, merged with the same
deep-merge semantics used by ConfigManager.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from buildlens.core.utils.io import iter_yaml_files, read_yaml
from buildlens.core.utils.merge import deep_merge


def merge_yaml_directory(base: Dict[str, Any], directory: Path) -> Dict[str, Any]:
    """Merge all YAML files from ``directory`` into ``base``.

    Files are merged in sorted order. Missing directories are ignored.
    YAML must be valid; invalid YAML raises.
    """
    d = Path(directory)
    if not d.exists():
        return base

    cfg: Dict[str, Any] = dict(base)
    for path in iter_yaml_files(d):
        module_cfg = read_yaml(path, default={}, raise_on_error=True) or {}
        if not isinstance(module_cfg, dict):
            raise ValueError(f"{path}: top-level YAML value must be a mapping")
        cfg = deep_merge(cfg, module_cfg)
    return cfg


__all__ = ["merge_yaml_directory"]
