"""Domain-specific configuration for ``bazel query`` invocations."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class QueryConfig(BaseDomainConfig):
    """Executable, flags and output format for ``bazel query``."""

    def _config_section(self) -> str:
        return "query"

    @cached_property
    def executable(self) -> str:
        """Bazel executable; an empty value falls back to ``bazel`` on PATH."""
        value = str(self.section.get("executable") or "").strip()
        return value or "bazel"

    @cached_property
    def startup_args(self) -> tuple[str, ...]:
        """Startup options placed before the ``query`` command."""
        return tuple(str(a) for a in (self.section.get("startup_args") or []))

    @cached_property
    def args(self) -> tuple[str, ...]:
        """Command options placed after ``query``."""
        return tuple(str(a) for a in (self.section.get("args") or []))

    @cached_property
    def output(self) -> str:
        return str(self.section.get("output") or "xml").strip().lower()


__all__ = ["QueryConfig"]
