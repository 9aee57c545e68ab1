"""Unified CLI output formatting utilities.

Supports both JSON and text output modes. Results go to stdout, errors and
warnings to stderr.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str) -> None:
        """Output a result: ``data`` as JSON, or ``message`` as text."""
        if self.json_mode:
            print(json.dumps(data, indent=self.indent, default=str))
        else:
            print(message)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output error result.

        Errors from the buildlens hierarchy contribute their own code and
        context to the JSON payload.
        """
        msg = message or str(error)
        if self.json_mode:
            to_json_error = getattr(error, "to_json_error", None)
            if callable(to_json_error):
                output = {"error": error_code, **to_json_error()}
                output["message"] = msg
            else:
                output = {"error": error_code, "message": msg}
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message)


__all__ = ["OutputFormatter"]
