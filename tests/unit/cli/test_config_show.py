from __future__ import annotations

import json

import pytest
import yaml

from buildlens import __version__
from buildlens.cli._dispatcher import main


def test_show_single_key_as_json(workspaces, capsys) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(repo, {"query": {"executable": "bazelisk"}})

    assert main(["config", "show", "query.executable", "--json", "--repo-root", str(repo)]) == 0
    assert json.loads(capsys.readouterr().out) == {"query": {"executable": "bazelisk"}}


def test_show_everything_as_yaml(tmp_path, capsys) -> None:
    assert main(["config", "show", "--repo-root", str(tmp_path)]) == 0

    cfg = yaml.safe_load(capsys.readouterr().out)
    assert cfg["codelens"]["test_command"] == "bazel.testTarget"


def test_missing_key_exits_1(tmp_path, capsys) -> None:
    assert main(["config", "show", "nope.key", "--repo-root", str(tmp_path)]) == 1
    assert "Key not found: nope.key" in capsys.readouterr().err


def test_invalid_config_is_an_error(workspaces, capsys) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(repo, {"query": {"output": "proto"}})

    assert main(["config", "show", "--repo-root", str(repo)]) == 1
    assert "query.output" in capsys.readouterr().err


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_no_arguments_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "lens" in capsys.readouterr().out
