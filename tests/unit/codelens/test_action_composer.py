from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from buildlens.core.codelens import (
    ActionComposer,
    ActionKind,
    CancellationToken,
    CommandArgs,
    CommandDescriptor,
)
from buildlens.core.config.domains.codelens import NOT_IN_WORKSPACE_MESSAGE
from buildlens.core.exceptions import ConfigError, QueryParseError, QueryProcessError, QueryTimeoutError
from buildlens.core.query.models import QueryResult, SourceLocation
from helpers.doubles import FakeQueryRunner, RecordingNotifier, rule


def _compose(composer: ActionComposer, path, token=None):
    return asyncio.run(composer.compose(path, token))


def test_repo_pkg_scenario(workspaces) -> None:
    repo = workspaces.create("repo")
    build = workspaces.build_file(repo, "pkg")
    runner = FakeQueryRunner(
        {
            "kind(rule, //pkg:all)": QueryResult(
                rules=(
                    rule("//pkg:mylib", "go_library", str(build), 3, 11),
                    rule("//pkg:mylib_test", "go_test", str(build), 9, 8),
                )
            )
        }
    )
    notifier = RecordingNotifier()

    actions = _compose(ActionComposer(runner, notifier), build)

    assert runner.calls == [(repo, "kind(rule, //pkg:all)", ())]
    assert notifier.warnings == []
    assert actions == [
        CommandDescriptor(
            title="Build //pkg:mylib",
            action_kind=ActionKind.BUILD,
            command="bazel.buildTarget",
            arguments=(CommandArgs(working_directory=repo, options=("//pkg:mylib",)),),
            tooltip="Build //pkg:mylib",
            anchor=SourceLocation(str(build), 3, 11),
        ),
        CommandDescriptor(
            title="Test //pkg:mylib_test",
            action_kind=ActionKind.TEST,
            command="bazel.testTarget",
            arguments=(CommandArgs(working_directory=repo, options=("//pkg:mylib_test",)),),
            tooltip="Test //pkg:mylib_test",
            anchor=SourceLocation(str(build), 9, 8),
        ),
    ]


def test_descriptor_wire_shape(workspaces) -> None:
    repo = workspaces.create("repo")
    build = workspaces.build_file(repo, "pkg")
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//pkg:mylib", "go_library", str(build), 3, 11),)))

    (action,) = _compose(ActionComposer(runner, RecordingNotifier()), build)

    assert action.to_dict() == {
        "title": "Build //pkg:mylib",
        "command": "bazel.buildTarget",
        "actionKind": "build",
        "tooltip": "Build //pkg:mylib",
        "arguments": [{"workingDirectory": str(repo), "options": ["//pkg:mylib"]}],
        "range": {"start": {"line": 2, "character": 10}, "end": {"line": 2, "character": 10}},
    }


def test_outside_workspace_warns_once_and_returns_nothing(tmp_path: Path) -> None:
    build = tmp_path / "loose" / "BUILD"
    build.parent.mkdir()
    build.write_text("", encoding="utf-8")
    runner = FakeQueryRunner()
    notifier = RecordingNotifier()

    assert _compose(ActionComposer(runner, notifier), build) == []
    assert notifier.warnings == [NOT_IN_WORKSPACE_MESSAGE]
    assert runner.calls == []


def test_root_package_queries_bare_root_label(workspaces) -> None:
    repo = workspaces.create("repo")
    runner = FakeQueryRunner()

    _compose(ActionComposer(runner, RecordingNotifier()), workspaces.build_file(repo))

    assert runner.calls[0][1] == "kind(rule, //:all)"


def test_innermost_workspace_is_the_working_directory(workspaces) -> None:
    workspaces.create("outer")
    inner = workspaces.create("outer/third_party/inner")
    build = workspaces.build_file(inner, "lib")
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//lib:x", "cc_library"),)))

    (action,) = _compose(ActionComposer(runner, RecordingNotifier()), build)

    assert runner.calls[0][:2] == (inner, "kind(rule, //lib:all)")
    assert action.arguments[0].working_directory == inner


@pytest.mark.parametrize(
    ("rule_class", "kind", "command"),
    [
        ("go_test", ActionKind.TEST, "bazel.testTarget"),
        ("foo_test", ActionKind.TEST, "bazel.testTarget"),
        ("foo_library", ActionKind.BUILD, "bazel.buildTarget"),
        ("test_suite", ActionKind.BUILD, "bazel.buildTarget"),
        ("genrule", ActionKind.BUILD, "bazel.buildTarget"),
    ],
)
def test_classification_is_by_rule_class_suffix(workspaces, rule_class, kind, command) -> None:
    repo = workspaces.create("repo")
    build = workspaces.build_file(repo, "pkg")
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//pkg:t", rule_class),)))

    (action,) = _compose(ActionComposer(runner, RecordingNotifier()), build)

    assert action.action_kind is kind
    assert action.command == command
    assert action.arguments == (CommandArgs(working_directory=repo, options=("//pkg:t",)),)


def test_output_preserves_query_order(workspaces) -> None:
    repo = workspaces.create("repo")
    build = workspaces.build_file(repo, "pkg")
    names = ["//pkg:z", "//pkg:a_test", "//pkg:m", "//pkg:b"]
    classes = ["cc_library", "cc_test", "genrule", "go_binary"]
    runner = FakeQueryRunner(
        default=QueryResult(rules=tuple(rule(n, c, str(build), i + 1) for i, (n, c) in enumerate(zip(names, classes))))
    )

    actions = _compose(ActionComposer(runner, RecordingNotifier()), build)

    assert [a.arguments[0].options[0] for a in actions] == names


def test_composition_is_idempotent(workspaces) -> None:
    repo = workspaces.create("repo")
    build = workspaces.build_file(repo, "pkg")
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//pkg:a", "go_library"), rule("//pkg:a_test", "go_test"))))
    composer = ActionComposer(runner, RecordingNotifier())

    assert _compose(composer, build) == _compose(composer, build)
    assert len(runner.calls) == 2


@pytest.mark.parametrize(
    "error",
    [
        QueryTimeoutError("timed out"),
        QueryProcessError("exit 1", returncode=1),
        QueryParseError("malformed"),
    ],
)
def test_query_failures_propagate(workspaces, error) -> None:
    repo = workspaces.create("repo")
    notifier = RecordingNotifier()
    composer = ActionComposer(FakeQueryRunner(error=error), notifier)

    with pytest.raises(type(error)):
        _compose(composer, workspaces.build_file(repo, "pkg"))
    assert notifier.warnings == []


def test_cancelled_before_query_issues_nothing(workspaces) -> None:
    repo = workspaces.create("repo")
    runner = FakeQueryRunner()
    notifier = RecordingNotifier()
    token = CancellationToken()
    token.cancel()

    assert _compose(ActionComposer(runner, notifier), workspaces.build_file(repo, "pkg"), token) == []
    assert runner.calls == []
    assert notifier.warnings == []


def test_cancelled_while_querying_discards_result(workspaces) -> None:
    repo = workspaces.create("repo")
    token = CancellationToken()
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//pkg:a", "go_library"),)))
    runner.on_call = token.cancel

    assert _compose(ActionComposer(runner, RecordingNotifier()), workspaces.build_file(repo, "pkg"), token) == []
    assert len(runner.calls) == 1


def test_cancelled_outside_workspace_does_not_warn(tmp_path: Path) -> None:
    notifier = RecordingNotifier()
    token = CancellationToken()
    token.cancel()

    assert _compose(ActionComposer(FakeQueryRunner(), notifier), tmp_path / "BUILD", token) == []
    assert notifier.warnings == []


def test_compositions_run_concurrently(workspaces) -> None:
    repo = workspaces.create("repo")
    files = [workspaces.build_file(repo, pkg) for pkg in ("a", "b", "c")]
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//x:y", "go_library"),)), delay=0.05)
    composer = ActionComposer(runner, RecordingNotifier())

    async def compose_all():
        return await asyncio.gather(*(composer.compose(f) for f in files))

    results = asyncio.run(compose_all())

    assert [len(r) for r in results] == [1, 1, 1]
    assert runner.max_in_flight == 3
    assert sorted(call[1] for call in runner.calls) == [
        "kind(rule, //a:all)",
        "kind(rule, //b:all)",
        "kind(rule, //c:all)",
    ]


def test_project_config_customizes_titles_and_commands(workspaces) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(
        repo,
        {
            "codelens": {
                "test_rule_suffix": "_spec",
                "build_title": "Compile {target}",
                "test_command": "myext.runSpec",
            }
        },
    )
    build = workspaces.build_file(repo, "pkg")
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//pkg:a", "go_library"), rule("//pkg:b", "js_spec"))))

    build_action, test_action = _compose(ActionComposer(runner, RecordingNotifier()), build)

    assert build_action.title == "Compile //pkg:a"
    assert test_action.action_kind is ActionKind.TEST
    assert test_action.command == "myext.runSpec"


def test_each_document_reads_its_own_workspace_config(workspaces) -> None:
    configured = workspaces.create("configured")
    workspaces.write_config(
        configured,
        {"workspace": {"markers": ["WORKSPACE"]}, "codelens": {"build_title": "Compile {target}"}},
    )
    nested = workspaces.create("configured/examples/hello", marker="MODULE.bazel")
    plain = workspaces.create("plain")
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//x:y", "go_library"),)))
    composer = ActionComposer(runner, RecordingNotifier())

    (nested_action,) = _compose(composer, workspaces.build_file(nested, "lib"))
    (plain_action,) = _compose(composer, workspaces.build_file(plain, "lib"))

    assert runner.calls[0][:2] == (configured, "kind(rule, //examples/hello/lib:all)")
    assert nested_action.title == "Compile //x:y"
    assert runner.calls[1][:2] == (plain, "kind(rule, //lib:all)")
    assert plain_action.title == "Build //x:y"


def test_unknown_title_placeholder_is_a_config_error(workspaces) -> None:
    repo = workspaces.create("repo")
    workspaces.write_config(repo, {"codelens": {"build_title": "Build {name}"}})
    runner = FakeQueryRunner(default=QueryResult(rules=(rule("//pkg:a", "go_library"),)))

    with pytest.raises(ConfigError, match="codelens.build_title"):
        _compose(ActionComposer(runner, RecordingNotifier()), workspaces.build_file(repo, "pkg"))
    assert runner.calls == []
