"""Command descriptors produced for a BUILD file."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Tuple

from buildlens.core.query.models import SourceLocation


class ActionKind(str, Enum):
    BUILD = "build"
    TEST = "test"


@dataclass(frozen=True)
class CommandArgs:
    """Argument bundle handed to the build/test command.

    Serialises to ``{"workingDirectory": ..., "options": [...]}``.
    """

    working_directory: Path
    options: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workingDirectory": str(self.working_directory),
            "options": list(self.options),
        }


@dataclass(frozen=True)
class CommandDescriptor:
    """One clickable action anchored at a rule in a BUILD file."""

    title: str
    action_kind: ActionKind
    command: str
    arguments: Tuple[CommandArgs, ...]
    tooltip: str
    anchor: SourceLocation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "command": self.command,
            "actionKind": self.action_kind.value,
            "tooltip": self.tooltip,
            "arguments": [a.to_dict() for a in self.arguments],
            "range": self.anchor.to_range(),
        }


__all__ = ["ActionKind", "CommandArgs", "CommandDescriptor"]
