"""Domain-specific configuration for workspace root detection."""
from __future__ import annotations

from functools import cached_property

from buildlens.core.paths.resolver import DEFAULT_MARKERS, DEFAULT_MAX_DEPTH

from ..base import BaseDomainConfig


class WorkspaceConfig(BaseDomainConfig):
    """Marker filenames and walk bound used by WorkspaceRootResolver."""

    def _config_section(self) -> str:
        return "workspace"

    @cached_property
    def markers(self) -> tuple[str, ...]:
        raw = self.section.get("markers") or list(DEFAULT_MARKERS)
        return tuple(str(m) for m in raw if str(m).strip())

    @cached_property
    def max_depth(self) -> int:
        return int(self.section.get("max_depth", DEFAULT_MAX_DEPTH))


__all__ = ["WorkspaceConfig"]
