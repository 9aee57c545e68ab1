"""Output parsers for ``bazel query``, keyed by ``--output`` format name."""
from __future__ import annotations

import logging

from . import location, xml
from .base import ParserProtocol

logger = logging.getLogger(__name__)

_PARSERS: dict[str, ParserProtocol] = {
    "xml": xml.parse,
    "location": location.parse,
}


def get_parser(name: str) -> ParserProtocol | None:
    """Get a registered parser by output format name."""
    return _PARSERS.get(name)


def register_parser(name: str, parser_fn: ParserProtocol) -> None:
    """Register a parser for an output format (replaces any existing one)."""
    _PARSERS[name] = parser_fn
    logger.debug("Registered query parser: %s", name)


def list_parsers() -> list[str]:
    return sorted(_PARSERS.keys())


__all__ = ["ParserProtocol", "get_parser", "register_parser", "list_parsers"]
