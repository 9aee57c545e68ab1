from __future__ import annotations

import json
from pathlib import Path

from buildlens.cli._dispatcher import main


def test_workspace_root_prints_root(workspaces, capsys) -> None:
    repo = workspaces.create("repo", marker="MODULE.bazel")
    build = workspaces.build_file(repo, "a/b")

    assert main(["workspace", "root", str(build)]) == 0
    assert capsys.readouterr().out.strip() == str(repo)


def test_workspace_root_not_found(tmp_path: Path, capsys) -> None:
    assert main(["workspace", "root", "--json", str(tmp_path / "BUILD")]) == 1

    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "workspace_not_found"
    assert err["code"] == "WorkspaceNotFoundError"


def test_workspace_package_prints_label_and_expression(workspaces, capsys) -> None:
    repo = workspaces.create("repo")
    build = workspaces.build_file(repo, "a/b")

    assert main(["workspace", "package", "--json", str(build)]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "workspace": str(repo),
        "package": "//a/b",
        "expression": "kind(rule, //a/b:all)",
    }


def test_workspace_package_at_root(workspaces, capsys) -> None:
    repo = workspaces.create("repo")

    assert main(["workspace", "package", str(workspaces.build_file(repo))]) == 0
    assert capsys.readouterr().out.splitlines() == ["//", "kind(rule, //:all)"]


def test_workspace_root_uses_markers_from_enclosing_project_config(workspaces, capsys) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(repo, {"workspace": {"markers": ["WORKSPACE"]}})
    nested = workspaces.create("repo/examples/hello", marker="MODULE.bazel")
    build = workspaces.build_file(nested, "lib")

    assert main(["workspace", "root", str(build)]) == 0
    assert capsys.readouterr().out.strip() == str(repo)
