"""Query engine: expressions, invocation and output parsing for ``bazel query``."""
from __future__ import annotations

from .expressions import ROOT_SCOPE, package_label, rules_in_package
from .models import QueryResult, RuleRecord, SourceLocation
from .runner import BazelQuery, BazelQueryRunner, QueryRunner

__all__ = [
    "ROOT_SCOPE",
    "package_label",
    "rules_in_package",
    "QueryResult",
    "RuleRecord",
    "SourceLocation",
    "BazelQuery",
    "BazelQueryRunner",
    "QueryRunner",
]
