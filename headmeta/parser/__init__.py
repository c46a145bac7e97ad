"""Head section parsing."""

from __future__ import annotations

from headmeta.parser.attributes import parse_attributes
from headmeta.parser.head import HeadParser, ParserState, extract_head
from headmeta.parser.known_tags import KNOWN_TAGS, KnownTag, classify
from headmeta.parser.structured import collect_json_ld

__all__ = [
    "KNOWN_TAGS",
    "HeadParser",
    "KnownTag",
    "ParserState",
    "classify",
    "collect_json_ld",
    "extract_head",
    "parse_attributes",
]
