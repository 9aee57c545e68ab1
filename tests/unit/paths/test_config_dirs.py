from __future__ import annotations

from pathlib import Path

from buildlens.core.paths import get_project_config_dir, get_user_config_dir


def test_project_config_dir_defaults_to_dot_buildlens(tmp_path: Path) -> None:
    assert get_project_config_dir(tmp_path) == tmp_path / ".buildlens"


def test_project_config_dir_can_be_renamed(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("BUILDLENS_PROJECT_CONFIG_DIR", ".config/buildlens")
    assert get_project_config_dir(tmp_path) == tmp_path / ".config" / "buildlens"


def test_user_config_dir_follows_env(user_config_dir: Path) -> None:
    assert get_user_config_dir() == user_config_dir.resolve()
