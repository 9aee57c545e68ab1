from __future__ import annotations

from pathlib import Path

import pytest

from buildlens.core.config import (
    BaseDomainConfig,
    CodeLensConfig,
    LoggingConfig,
    QueryConfig,
    TimeoutsConfig,
    WorkspaceConfig,
)
from buildlens.core.exceptions import ConfigError


def test_base_config_is_abstract() -> None:
    with pytest.raises(TypeError):
        BaseDomainConfig()  # type: ignore[abstract]


def test_defaults(tmp_path: Path) -> None:
    assert WorkspaceConfig(tmp_path).markers == ("WORKSPACE", "WORKSPACE.bazel", "MODULE.bazel")
    assert WorkspaceConfig(tmp_path).max_depth == 256

    query = QueryConfig(tmp_path)
    assert (query.executable, query.startup_args, query.args, query.output) == (
        "bazel",
        (),
        ("--noshow_progress",),
        "xml",
    )

    lens = CodeLensConfig(tmp_path)
    assert lens.test_rule_suffix == "_test"
    assert (lens.build_command, lens.test_command) == ("bazel.buildTarget", "bazel.testTarget")
    assert lens.build_title.format(target="//p:x") == "Build //p:x"
    assert lens.test_tooltip.format(target="//p:x") == "Test //p:x"

    timeouts = TimeoutsConfig(tmp_path)
    assert (timeouts.query_seconds, timeouts.default_seconds) == (120.0, 60.0)
    assert LoggingConfig(tmp_path).level == "WARNING"
    assert LoggingConfig(tmp_path).file is None


def test_logging_file_is_relative_to_repo_root(workspaces) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(repo, {"logging": {"level": "debug", "file": "logs/buildlens.log"}})

    cfg = LoggingConfig(repo)

    assert cfg.level == "DEBUG"
    assert cfg.file == repo / "logs" / "buildlens.log"


def test_custom_section_is_readable(workspaces) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(repo, {"editor": {"refresh": True}})

    class EditorConfig(BaseDomainConfig):
        def _config_section(self) -> str:
            return "editor"

    assert EditorConfig(repo_root=repo).section == {"refresh": True}
    assert EditorConfig(repo_root=repo).repo_root == repo


@pytest.mark.parametrize(
    ("key", "template"),
    [
        ("build_title", "Build {name}"),
        ("test_tooltip", "Test {}"),
        ("test_title", "Test {target"),
    ],
)
def test_codelens_templates_only_accept_target(workspaces, key, template) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(repo, {"codelens": {key: template}})

    with pytest.raises(ConfigError, match=f"codelens.{key}") as excinfo:
        CodeLensConfig(repo)
    assert excinfo.value.context["key"] == f"codelens.{key}"


def test_codelens_template_may_format_target(workspaces) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(repo, {"codelens": {"build_title": "Build {target!s:>4}"}})

    assert CodeLensConfig(repo).build_title.format(target="//p:x") == "Build //p:x"
