"""JSON-LD extraction from ``<script type="application/ld+json">`` blocks."""

from __future__ import annotations

import json
import re

import structlog

from headmeta.errors import StructuredDataParseError
from headmeta.parser.attributes import parse_attributes

logger = structlog.get_logger()

JSON_LD_TYPE = "application/ld+json"

_SCRIPT_RE = re.compile(
    r"<script\b([^>]*)>(.*?)</script\s*>",
    re.DOTALL | re.IGNORECASE,
)

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def strip_block_comments(text: str) -> str:
    """Remove ``/* ... */`` comments and surrounding whitespace."""
    return _BLOCK_COMMENT_RE.sub("", text).strip()


def parse_json_ld_block(text: str) -> object:
    """Decode the cleaned body of one JSON-LD script.

    Raises:
        StructuredDataParseError: If the block is not valid JSON.
    """
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise StructuredDataParseError(f"Failed to parse JSON-LD: {exc}") from exc


def collect_json_ld(html: str) -> list[object]:
    """Collect every JSON-LD value in document order.

    A top-level array contributes each of its items. Empty blocks are
    ignored; malformed ones are logged and skipped.
    """
    found: list[object] = []
    for m in _SCRIPT_RE.finditer(html):
        script_type = parse_attributes(m.group(1)).get("type", "")
        if script_type.lower() != JSON_LD_TYPE:
            continue
        body = strip_block_comments(m.group(2))
        if not body:
            continue
        try:
            data = parse_json_ld_block(body)
        except StructuredDataParseError as exc:
            logger.warning("jsonld_parse_failed", error=str(exc), snippet=body[:80])
            continue
        if isinstance(data, list):
            found.extend(data)
        else:
            found.append(data)
    return found
