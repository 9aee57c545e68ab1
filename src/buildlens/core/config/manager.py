"""
buildlens configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml

from buildlens.core.exceptions import ConfigError
from buildlens.core.utils.layered_yaml import merge_yaml_directory
from buildlens.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "BUILDLENS_"
# Env vars under the prefix that configure paths rather than config keys.
_RESERVED_ENV_KEYS = {
    "BUILDLENS_PROJECT_ROOT",
    "BUILDLENS_PROJECT_CONFIG_DIR",
    "BUILDLENS_USER_CONFIG_DIR",
}

CONFIG_SCHEMA = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate buildlens configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: BUILDLENS_<section>__<key>
    2. Project-local config: <workspace>/.buildlens/config.local/*.yaml (uncommitted)
    3. Project config: <workspace>/.buildlens/config/*.yaml
    4. User config: ~/.buildlens/config/*.yaml
    5. Bundled defaults: buildlens.data/config/*.yaml

    Files inside one directory merge in sorted order.
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else self._find_repo_root()

        from buildlens.core.paths import get_project_config_dir, get_user_config_dir

        project_root_dir = get_project_config_dir(self.repo_root)
        user_root_dir = get_user_config_dir()

        self.core_config_dir = get_data_path("config")
        self.user_config_dir = user_root_dir / "config"
        self.project_config_dir = project_root_dir / "config"
        self.project_local_config_dir = project_root_dir / "config.local"

    def _find_repo_root(self) -> Path:
        from buildlens.core.paths import resolve_project_root

        return resolve_project_root()

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[str]:
        if not raw:
            return []
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            if strict:
                raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
            return []
        # Keys are canonical lowercase (query__executable -> query.executable).
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[str], Any, str]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV_KEYS:
                continue
            raw = key[len(ENV_PREFIX) :]
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key]), raw

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for part in path[:-1]:
            if not isinstance(cur, dict):
                raise ConfigError(f"Cannot override '{'.'.join(path)}': '{part}' is not a mapping")
            if not isinstance(cur.get(part), dict):
                cur[part] = {}
            cur = cur[part]
        if not isinstance(cur, dict):
            raise ConfigError(f"Cannot override '{'.'.join(path)}': parent is not a mapping")
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value, raw in self._iter_env_overrides(strict=strict):
            logger.debug("config override from %s%s", ENV_PREFIX, raw)
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return merge_yaml_directory(cfg, directory)
        except (yaml.YAMLError, ValueError, OSError) as exc:
            raise ConfigError(
                f"Invalid configuration in {directory}: {exc}",
                context={"directory": str(directory)},
            ) from exc

    def validate_schema(self, config: Dict[str, Any]) -> None:
        from buildlens.core.schemas.validation import SchemaValidationError, validate_payload

        try:
            validate_payload(config, CONFIG_SCHEMA)
        except SchemaValidationError as exc:
            raise ConfigError(str(exc), context={"repo_root": str(self.repo_root)}) from exc

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from every layer (UNCACHED)."""
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.user_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        cfg = self._load_directory(self.project_local_config_dir, cfg)
        self.apply_env_overrides(cfg, strict=validate)

        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration (cached per repo root and fingerprint)."""
        from buildlens.core.config.cache import get_cached_config

        return get_cached_config(repo_root=self.repo_root, validate=validate)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dot-separated key (``query.executable``) in the merged config."""
        cur: Any = self.load_config(validate=False)
        for part in [p for p in key.split(".") if p]:
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


__all__ = ["ConfigManager", "ENV_PREFIX", "CONFIG_SCHEMA"]
