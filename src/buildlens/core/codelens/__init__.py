"""Build/test action composition for BUILD files."""
from __future__ import annotations

from .composer import ActionComposer, CancellationToken, classify_rule, descriptor_for_rule
from .models import ActionKind, CommandArgs, CommandDescriptor
from .notifier import ConsoleNotifier, LoggingNotifier, Notifier

__all__ = [
    "ActionComposer",
    "CancellationToken",
    "classify_rule",
    "descriptor_for_rule",
    "ActionKind",
    "CommandArgs",
    "CommandDescriptor",
    "ConsoleNotifier",
    "LoggingNotifier",
    "Notifier",
]
