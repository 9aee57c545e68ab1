"""Domain-specific configuration for subprocess timeouts."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig

_REQUIRED_TIMEOUT_KEYS = (
    "query_seconds",
    "default_seconds",
)


class TimeoutsConfig(BaseDomainConfig):
    """Typed, cached access to timeout configuration."""

    def _config_section(self) -> str:
        return "timeouts"

    def _validate_required_keys(self) -> None:
        if not self.section:
            raise RuntimeError("timeouts section missing from configuration")

        for key in _REQUIRED_TIMEOUT_KEYS:
            if key not in self.section:
                raise RuntimeError(f"timeouts.{key} missing from configuration")

    @cached_property
    def query_seconds(self) -> float:
        """Timeout for ``bazel query`` in seconds."""
        self._validate_required_keys()
        return float(self.section["query_seconds"])

    @cached_property
    def default_seconds(self) -> float:
        """Timeout for any other subprocess in seconds."""
        self._validate_required_keys()
        return float(self.section["default_seconds"])


__all__ = ["TimeoutsConfig"]
