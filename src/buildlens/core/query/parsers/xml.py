"""Parser for ``bazel query --output=xml``.

Bazel emits one ``<rule>`` element per rule, in declaration order:

    <query version="2">
      <rule class="go_library" location="/repo/pkg/BUILD:3:11" name="//pkg:mylib">
        ...
      </rule>
      <source-file name="//pkg:main.go" location="..."/>
    </query>

Only ``rule`` elements become records; source and generated files are skipped.
"""
from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

from buildlens.core.exceptions import QueryParseError

from ..models import QueryResult, RuleRecord, SourceLocation

logger = logging.getLogger(__name__)

# Bazel declares XML 1.1, which expat refuses; the declaration carries nothing we need.
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


def parse(output: str) -> QueryResult:
    """Parse XML query output into rule records (document order preserved)."""
    body = _XML_DECLARATION.sub("", output or "", count=1).strip()
    if not body:
        return QueryResult()

    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise QueryParseError(f"Malformed XML query output: {exc}") from exc

    rules: list[RuleRecord] = []
    for element in root.iter("rule"):
        name = (element.get("name") or "").strip()
        rule_class = (element.get("class") or "").strip()
        raw_location = element.get("location") or ""
        if not name or not rule_class:
            raise QueryParseError(
                "XML rule element is missing 'name' or 'class'",
                context={"name": name, "class": rule_class},
            )
        try:
            location = SourceLocation.parse(raw_location)
        except ValueError as exc:
            raise QueryParseError(
                f"Rule {name} has no usable location", context={"location": raw_location}
            ) from exc
        rules.append(RuleRecord(name=name, rule_class=rule_class, location=location))

    logger.debug("parsed %d rule(s) from XML query output", len(rules))
    return QueryResult(rules=tuple(rules))


__all__ = ["parse"]
