"""Configuration directory resolution.

Project configuration lives in ``<workspace>/.buildlens`` and user
configuration in ``~/.buildlens``. Both locations can be overridden through
environment variables, which the test-suite relies on for isolation.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_PROJECT_CONFIG_DIR = ".buildlens"
DEFAULT_USER_CONFIG_DIR = ".buildlens"

PROJECT_CONFIG_DIR_ENV = "BUILDLENS_PROJECT_CONFIG_DIR"
USER_CONFIG_DIR_ENV = "BUILDLENS_USER_CONFIG_DIR"


def get_project_config_dir(repo_root: Path) -> Path:
    """Return the project config directory (``<repo_root>/.buildlens``).

    ``BUILDLENS_PROJECT_CONFIG_DIR`` renames the directory; relative values are
    taken relative to ``repo_root``.
    """
    name = os.environ.get(PROJECT_CONFIG_DIR_ENV, "").strip() or DEFAULT_PROJECT_CONFIG_DIR
    p = Path(name).expanduser()
    if not p.is_absolute():
        p = Path(repo_root) / p
    return p


def get_user_config_dir() -> Path:
    """Return the user config directory resolved via env.

    Relative values are treated as relative to the user's home directory
    (not CWD).
    """
    raw = os.environ.get(USER_CONFIG_DIR_ENV, "").strip() or DEFAULT_USER_CONFIG_DIR
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = Path.home() / p
    return p.resolve()


__all__ = [
    "DEFAULT_PROJECT_CONFIG_DIR",
    "DEFAULT_USER_CONFIG_DIR",
    "PROJECT_CONFIG_DIR_ENV",
    "USER_CONFIG_DIR_ENV",
    "get_project_config_dir",
    "get_user_config_dir",
]
