"""
buildlens config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, user and project
overrides, and environment variables. Supports filtering by key.
"""

from __future__ import annotations

import argparse
from typing import Any

import yaml

from buildlens.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from buildlens.core.config import ConfigManager

SUMMARY = "Show current configuration"


def _nest_key(key: str, value: Any) -> Any:
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'query.executable')",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    config_manager = ConfigManager(get_repo_root(args))

    if args.key:
        value = config_manager.get(args.key)
        if value is None:
            formatter.error(KeyError(args.key), f"Key not found: {args.key}", error_code="key_not_found")
            return 1
        data = _nest_key(args.key, value)
    else:
        data = config_manager.load_config(validate=True)

    if formatter.json_mode:
        formatter.json_output(data)
    else:
        formatter.text(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True).rstrip()
        )
    return 0
