from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_CONFIGURED_TARGET: str | None = None
_BUILDLENS_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER: logging.Handler | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = getattr(logging, str(name).upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Configure stdlib logging for the CLI.

    Logs go to ``log_path`` when given, otherwise to stderr (never stdout, so
    command output stays parseable). Idempotent per-process for the same
    target; switching targets replaces the previously installed handler.
    """
    global _CONFIGURED_TARGET, _BUILDLENS_HANDLER

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _BUILDLENS_HANDLER is not None:
        _BUILDLENS_HANDLER.setLevel(_level_from_name(level))
        return

    if _BUILDLENS_HANDLER is not None:
        root.removeHandler(_BUILDLENS_HANDLER)
        _BUILDLENS_HANDLER.close()
        _BUILDLENS_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _BUILDLENS_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by :func:`configure_logging`."""
    global _CONFIGURED_TARGET, _BUILDLENS_HANDLER, _JSON_MODE_NULL_HANDLER
    root = logging.getLogger()
    if _BUILDLENS_HANDLER is not None:
        root.removeHandler(_BUILDLENS_HANDLER)
        _BUILDLENS_HANDLER.close()
    if _JSON_MODE_NULL_HANDLER is not None:
        root.removeHandler(_JSON_MODE_NULL_HANDLER)
    root.setLevel(logging.WARNING)
    _CONFIGURED_TARGET = None
    _BUILDLENS_HANDLER = None
    _JSON_MODE_NULL_HANDLER = None


def suppress_lastresort_in_json_mode() -> None:
    """Prevent stdlib logging's lastResort handler from polluting JSON output.

    Python's logging module emits WARNING+ records to stderr through the
    implicit ``lastResort`` handler when no handlers are configured. Installing
    a NullHandler on the root logger disables that path.
    """
    global _JSON_MODE_NULL_HANDLER

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER is not None:
        return
    _JSON_MODE_NULL_HANDLER = logging.NullHandler()
    root.addHandler(_JSON_MODE_NULL_HANDLER)


__all__ = [
    "configure_logging",
    "reset_logging_for_tests",
    "suppress_lastresort_in_json_mode",
]
