"""Base types for ``bazel query`` output parsers.

Every parser module exports a ``parse(output: str) -> QueryResult`` function
and raises :class:`QueryParseError` on malformed output.
"""
from __future__ import annotations

from typing import Protocol

from ..models import QueryResult


class ParserProtocol(Protocol):
    """Protocol for parser functions."""

    def __call__(self, output: str) -> QueryResult:
        """Parse raw ``bazel query`` stdout into a QueryResult."""
        ...


__all__ = ["ParserProtocol"]
