"""Domain-specific configuration for BUILD file code lens actions.

Titles and tooltips are ``str.format`` templates receiving ``target``.
"""
from __future__ import annotations

import string
from functools import cached_property
from pathlib import Path
from typing import Optional

from buildlens.core.exceptions import ConfigError

from ..base import BaseDomainConfig

NOT_IN_WORKSPACE_MESSAGE = (
    "Bazel BUILD CodeLens unavailable as currently opened file is not in a Bazel workspace"
)

TEMPLATE_FIELDS = frozenset({"target"})
TEMPLATE_KEYS = ("build_title", "test_title", "build_tooltip", "test_tooltip")


class CodeLensConfig(BaseDomainConfig):
    def __init__(self, repo_root: Optional[Path] = None, *, validate: bool = True) -> None:
        super().__init__(repo_root, validate=validate)
        for key in TEMPLATE_KEYS:
            _check_template(key, getattr(self, key))

    def _config_section(self) -> str:
        return "codelens"

    @cached_property
    def test_rule_suffix(self) -> str:
        return str(self.section.get("test_rule_suffix") or "_test")

    @cached_property
    def build_command(self) -> str:
        return str(self.section.get("build_command") or "bazel.buildTarget")

    @cached_property
    def test_command(self) -> str:
        return str(self.section.get("test_command") or "bazel.testTarget")

    @cached_property
    def build_title(self) -> str:
        return str(self.section.get("build_title") or "Build {target}")

    @cached_property
    def test_title(self) -> str:
        return str(self.section.get("test_title") or "Test {target}")

    @cached_property
    def build_tooltip(self) -> str:
        return str(self.section.get("build_tooltip") or "Build {target}")

    @cached_property
    def test_tooltip(self) -> str:
        return str(self.section.get("test_tooltip") or "Test {target}")

    @cached_property
    def not_in_workspace_message(self) -> str:
        return str(self.section.get("not_in_workspace_message") or NOT_IN_WORKSPACE_MESSAGE)


def _check_template(key: str, template: str) -> None:
    """Raise ConfigError unless ``template`` only uses the ``{target}`` field."""
    try:
        fields = {
            name.split(".", 1)[0].split("[", 1)[0]
            for _, name, _, _ in string.Formatter().parse(template)
            if name is not None
        }
    except ValueError as exc:
        raise ConfigError(
            f"codelens.{key}: malformed template {template!r}: {exc}",
            context={"key": f"codelens.{key}", "template": template},
        ) from exc
    unknown = sorted(fields - TEMPLATE_FIELDS)
    if unknown:
        raise ConfigError(
            f"codelens.{key}: unknown placeholder(s) {unknown} in {template!r}; only {{target}} is available",
            context={"key": f"codelens.{key}", "template": template, "placeholders": unknown},
        )


__all__ = ["CodeLensConfig", "NOT_IN_WORKSPACE_MESSAGE", "TEMPLATE_FIELDS"]
