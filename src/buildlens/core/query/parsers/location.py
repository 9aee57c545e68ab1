"""Parser for ``bazel query --output=location``.

Each line reads ``<path>:<line>:<column>: <kind> <label>`` where ``kind`` is
``<rule_class> rule`` for rules and ``source file`` / ``generated file`` for
files. Only rule lines become records.
"""
from __future__ import annotations

import logging
import re

from buildlens.core.exceptions import QueryParseError

from ..models import QueryResult, RuleRecord, SourceLocation

logger = logging.getLogger(__name__)

_LINE = re.compile(r"^(?P<location>.+?:\d+(?::\d+)?): (?P<kind>.+) (?P<label>\S+)$")


def parse(output: str) -> QueryResult:
    rules: list[RuleRecord] = []
    for lineno, raw in enumerate((output or "").splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        match = _LINE.match(line)
        if match is None:
            raise QueryParseError(
                f"Unrecognized location output on line {lineno}: {line!r}",
                context={"line": lineno},
            )
        kind = match.group("kind").split()
        if len(kind) != 2 or kind[1] != "rule":
            continue
        rules.append(
            RuleRecord(
                name=match.group("label"),
                rule_class=kind[0],
                location=SourceLocation.parse(match.group("location")),
            )
        )

    logger.debug("parsed %d rule(s) from location query output", len(rules))
    return QueryResult(rules=tuple(rules))


__all__ = ["parse"]
