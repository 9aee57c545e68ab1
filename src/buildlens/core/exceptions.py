from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class BuildLensError(Exception):
    """Base exception for buildlens."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(BuildLensError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        BuildLensError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class WorkspaceNotFoundError(BuildLensError, FileNotFoundError):
    """Raised when a path is not inside any Bazel workspace.

    Only commands that require a workspace raise this; code lens composition
    recovers from a missing workspace by returning no actions.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        BuildLensError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class QueryError(BuildLensError, RuntimeError):
    """Base class for failures of ``bazel query``."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        BuildLensError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class QueryTimeoutError(QueryError):
    """Raised when ``bazel query`` exceeds its configured timeout."""


class QueryProcessError(QueryError):
    """Raised when ``bazel query`` cannot be started or exits non-zero."""

    def __init__(
        self,
        message: str = "",
        *,
        returncode: Optional[int] = None,
        stderr: str = "",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.returncode = returncode
        self.stderr = stderr
        self.context.setdefault("returncode", returncode)


class QueryParseError(QueryError):
    """Raised when ``bazel query`` output cannot be parsed into rule records."""


__all__ = [
    "BuildLensError",
    "ConfigError",
    "WorkspaceNotFoundError",
    "QueryError",
    "QueryTimeoutError",
    "QueryProcessError",
    "QueryParseError",
]
