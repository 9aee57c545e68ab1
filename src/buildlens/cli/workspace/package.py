"""
buildlens workspace package command.

SUMMARY: Show the package label and query expression for a BUILD file

Useful to reproduce by hand the query issued by ``buildlens lens list``.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from buildlens.cli import OutputFormatter, add_json_flag, require_workspace_root
from buildlens.core.exceptions import WorkspaceNotFoundError
from buildlens.core.query import package_label, rules_in_package

SUMMARY = "Show the package label and query expression for a BUILD file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("path", help="BUILD file")
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    document = Path(args.path).absolute()
    try:
        root = require_workspace_root(document)
    except WorkspaceNotFoundError as e:
        formatter.error(e, error_code="workspace_not_found")
        return 1

    label = package_label(root, document)
    expression = rules_in_package(label)
    formatter.success(
        {"workspace": str(root), "package": label, "expression": expression},
        f"{label}\n{expression}",
    )
    return 0
