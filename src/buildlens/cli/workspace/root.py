"""
buildlens workspace root command.

SUMMARY: Show the Bazel workspace root owning a file
"""

from __future__ import annotations

import argparse

from buildlens.cli import OutputFormatter, add_json_flag, require_workspace_root
from buildlens.core.exceptions import WorkspaceNotFoundError

SUMMARY = "Show the Bazel workspace root owning a file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("path", help="File inside the workspace (usually a BUILD file)")
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        root = require_workspace_root(args.path)
    except WorkspaceNotFoundError as e:
        formatter.error(e, error_code="workspace_not_found")
        return 1

    formatter.success({"path": args.path, "workspace": str(root)}, str(root))
    return 0
