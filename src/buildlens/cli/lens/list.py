"""
buildlens lens list command.

SUMMARY: List build/test actions for BUILD files

Resolves the workspace of each BUILD file, queries the rules declared in its
package and prints one action per rule. Files are composed concurrently.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Any

from buildlens.cli import OutputFormatter, add_json_flag
from buildlens.core.codelens import ActionComposer, CommandDescriptor, ConsoleNotifier
from buildlens.core.exceptions import QueryError
from buildlens.core.paths import WorkspaceRootResolver
from buildlens.core.query import BazelQueryRunner

SUMMARY = "List build/test actions for BUILD files"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="BUILD file(s) to compose actions for",
    )
    parser.add_argument(
        "--extra-arg",
        dest="extra_args",
        action="append",
        default=[],
        metavar="ARG",
        help="Extra argument appended to the bazel query command line (repeatable)",
    )
    add_json_flag(parser)


async def _compose_all(composer: ActionComposer, files: list[Path]) -> list[Any]:
    return await asyncio.gather(
        *(composer.compose(path) for path in files),
        return_exceptions=True,
    )


def _format_action(action: CommandDescriptor) -> str:
    return f"{action.title}  {action.command}  {action.anchor}"


def main(args: argparse.Namespace) -> int:
    """Compose actions for every file - delegates to ActionComposer."""
    json_mode = bool(getattr(args, "json", False))
    formatter = OutputFormatter(json_mode=json_mode)
    notifier = ConsoleNotifier(json_mode=json_mode)

    files = [Path(f).absolute() for f in args.files]
    composer = ActionComposer(
        BazelQueryRunner(),
        notifier,
        extra_args=args.extra_args or (),
    )

    outcomes = asyncio.run(_compose_all(composer, files))

    exit_code = 0
    entries: list[dict[str, Any]] = []
    lines: list[str] = []
    for path, outcome in zip(files, outcomes):
        if isinstance(outcome, QueryError):
            logger.warning("query for %s failed: %s", path, outcome)
            notifier.warn(f"Bazel query failed: {outcome}")
            exit_code = 1
            continue
        if isinstance(outcome, BaseException):
            raise outcome

        workspace = WorkspaceRootResolver.for_document(path).resolve(path)
        entries.append(
            {
                "path": str(path),
                "workspace": str(workspace) if workspace is not None else None,
                "actions": [a.to_dict() for a in outcome],
            }
        )
        if outcome:
            lines.append(f"{path}:")
            lines.extend(f"  {_format_action(a)}" for a in outcome)

    if json_mode:
        formatter.json_output({"files": entries})
    elif lines:
        formatter.text("\n".join(lines))
    return exit_code
