"""Structured results of ``bazel query``.

These are the records that cross the boundary between the query engine and
code lens composition. All of them are immutable.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Tuple


@dataclass(frozen=True)
class SourceLocation:
    """A position in a BUILD file (1-based line and column, as Bazel reports)."""

    path: str
    line: int = 1
    column: int = 1

    @classmethod
    def parse(cls, raw: str) -> "SourceLocation":
        """Parse Bazel's ``path:line:column`` location string.

        The path may itself contain colons (``C:\\ws\\BUILD:3:1``), so the
        string is split from the right. Line and column are optional.

        Raises:
            ValueError: When the string is empty.
        """
        text = (raw or "").strip()
        if not text:
            raise ValueError("empty source location")

        parts = text.rsplit(":", 2)
        if len(parts) == 3 and parts[1].isdigit() and parts[2].isdigit():
            return cls(path=parts[0], line=int(parts[1]), column=int(parts[2]))
        parts = text.rsplit(":", 1)
        if len(parts) == 2 and parts[1].isdigit():
            return cls(path=parts[0], line=int(parts[1]))
        return cls(path=text)

    def to_range(self) -> Dict[str, Dict[str, int]]:
        """Zero-based, empty editor range at this position."""
        position = {"line": max(self.line - 1, 0), "character": max(self.column - 1, 0)}
        return {"start": dict(position), "end": dict(position)}

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class RuleRecord:
    """One rule declared in a package."""

    name: str
    rule_class: str
    location: SourceLocation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ruleClass": self.rule_class,
            "location": str(self.location),
        }


@dataclass(frozen=True)
class QueryResult:
    """Ordered rules returned by a single query."""

    rules: Tuple[RuleRecord, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[RuleRecord]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


__all__ = ["SourceLocation", "RuleRecord", "QueryResult"]
