"""Compose build/test actions for a Bazel BUILD file.

For a BUILD file the composer:
1. resolves the owning workspace root (innermost marker wins),
2. derives the package label and asks the query runner for the rules
   declared directly in that package,
3. maps every rule, in query order, to a :class:`CommandDescriptor`.

A file outside any workspace produces one warning and no actions. Query
failures are not handled here; they propagate to the caller.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from buildlens.core.config.domains.codelens import CodeLensConfig
from buildlens.core.paths.resolver import WorkspaceRootResolver, resolve_project_root
from buildlens.core.query.expressions import package_label, rules_in_package
from buildlens.core.query.models import RuleRecord
from buildlens.core.query.runner import QueryRunner

from .models import ActionKind, CommandArgs, CommandDescriptor
from .notifier import Notifier

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and ``compose``."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled


def classify_rule(rule_class: str, test_suffix: str = "_test") -> ActionKind:
    """TEST when ``rule_class`` ends with ``test_suffix``, otherwise BUILD."""
    if test_suffix and rule_class.endswith(test_suffix):
        return ActionKind.TEST
    return ActionKind.BUILD


def descriptor_for_rule(
    rule: RuleRecord,
    working_directory: Path,
    settings: CodeLensConfig,
) -> CommandDescriptor:
    kind = classify_rule(rule.rule_class, settings.test_rule_suffix)
    if kind is ActionKind.TEST:
        title, command, tooltip = settings.test_title, settings.test_command, settings.test_tooltip
    else:
        title, command, tooltip = settings.build_title, settings.build_command, settings.build_tooltip

    return CommandDescriptor(
        title=title.format(target=rule.name),
        action_kind=kind,
        command=command,
        arguments=(CommandArgs(working_directory=working_directory, options=(rule.name,)),),
        tooltip=tooltip.format(target=rule.name),
        anchor=rule.location,
    )


class ActionComposer:
    """Turn a BUILD file path into an ordered list of command descriptors."""

    def __init__(
        self,
        query_runner: QueryRunner,
        notifier: Notifier,
        *,
        resolver: Optional[WorkspaceRootResolver] = None,
        settings: Optional[CodeLensConfig] = None,
        extra_args: Sequence[str] = (),
    ) -> None:
        self.query_runner = query_runner
        self.notifier = notifier
        self.resolver = resolver
        self._settings = settings
        self.extra_args = tuple(extra_args)

    def _resolver_for(self, document_path: str | Path) -> WorkspaceRootResolver:
        if self.resolver is not None:
            return self.resolver
        return WorkspaceRootResolver.for_document(document_path)

    def _settings_for(self, workspace: Path) -> CodeLensConfig:
        if self._settings is not None:
            return self._settings
        return CodeLensConfig(repo_root=workspace)

    async def compose(
        self,
        document_path: str | Path,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[CommandDescriptor]:
        """Return the actions for the BUILD file at ``document_path``.

        Raises:
            QueryError: The query could not be run or its output was unusable.
        """
        if cancellation is not None and cancellation.is_cancelled:
            return []

        workspace = self._resolver_for(document_path).resolve(document_path)
        if workspace is None:
            settings = self._settings_for(resolve_project_root(Path(document_path).absolute().parent))
            self.notifier.warn(settings.not_in_workspace_message)
            return []

        settings = self._settings_for(resolve_project_root(workspace))
        label = package_label(workspace, document_path)
        expression = rules_in_package(label)
        logger.debug("composing %s: package %s in %s", document_path, label, workspace)

        result = await self.query_runner.run_query(workspace, expression, self.extra_args)

        if cancellation is not None and cancellation.is_cancelled:
            logger.debug("composition of %s cancelled; discarding %d rule(s)", document_path, len(result))
            return []

        return [descriptor_for_rule(rule, workspace, settings) for rule in result]


__all__ = [
    "CancellationToken",
    "classify_rule",
    "descriptor_for_rule",
    "ActionComposer",
]
