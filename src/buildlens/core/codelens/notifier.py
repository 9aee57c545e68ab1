"""User-visible warning channel for code lens composition."""
from __future__ import annotations

import json
import logging
import sys
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def warn(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Route warnings into the ``buildlens`` log."""

    def __init__(self, name: str = "buildlens.notify") -> None:
        self._logger = logging.getLogger(name)

    def warn(self, message: str) -> None:
        self._logger.warning(message)


class ConsoleNotifier:
    """Print warnings to stderr.

    In JSON mode each warning is a single ``{"warning": ...}`` line so that a
    consumer reading stderr can still parse it.
    """

    def __init__(self, *, json_mode: bool = False, stream: TextIO | None = None) -> None:
        self.json_mode = json_mode
        self._stream = stream

    def warn(self, message: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        if self.json_mode:
            print(json.dumps({"warning": message}), file=stream)
        else:
            print(f"Warning: {message}", file=stream)
        logger.debug("warning shown: %s", message)


__all__ = ["Notifier", "LoggingNotifier", "ConsoleNotifier"]
