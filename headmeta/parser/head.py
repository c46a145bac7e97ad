"""Incremental ``<head>`` parser.

Text is accumulated until ``</head>`` is seen (or the stream ends), then
one extraction pass builds the ``Metadata``. Anything after the head
boundary is never scanned.
"""

from __future__ import annotations

import re
from enum import StrEnum

import structlog

from headmeta.parser.attributes import parse_attributes
from headmeta.parser.known_tags import classify
from headmeta.parser.structured import collect_json_ld
from headmeta.types import Metadata, MetadataBuilder

logger = structlog.get_logger()

_HEAD_END_RE = re.compile(r"</head\s*>", re.IGNORECASE)
_TITLE_RE = re.compile(r"<title[^>]*>([^<]*)</title>", re.IGNORECASE)
_LINK_RE = re.compile(r"<link\b([^>]*)>", re.IGNORECASE)
_META_RE = re.compile(r"<meta\b([^>]*)>", re.IGNORECASE)


class ParserState(StrEnum):
    """Lifecycle of a ``HeadParser``."""

    ACCUMULATING = "accumulating"
    DONE = "done"


def _find_canonical(html: str) -> str | None:
    for m in _LINK_RE.finditer(html):
        attrs = parse_attributes(m.group(1))
        if attrs.get("rel", "").lower() == "canonical" and attrs.get("href"):
            return attrs["href"]
    return None


def extract_head(html: str) -> Metadata:
    """Extract metadata from head markup in a single pass.

    Title and canonical take the first match. Description, keywords and
    namespaced values are overwritten by later tags. Malformed markup
    contributes nothing and never raises.

    Args:
        html: Head section text (or whatever prefix of the document
            was captured).

    Returns:
        Frozen Metadata.
    """
    builder = MetadataBuilder()

    title_m = _TITLE_RE.search(html)
    if title_m and title_m.group(1):
        builder.title = title_m.group(1)

    builder.canonical = _find_canonical(html)

    for m in _META_RE.finditer(html):
        if not m.group(1):
            continue
        attrs = parse_attributes(m.group(1))
        if classify(attrs, builder):
            continue
        name = attrs.get("name", "").lower()
        content = attrs.get("content")
        if name == "description":
            if content:
                builder.description = content
        elif name == "keywords":
            if content:
                builder.keywords = content
        else:
            builder.meta.append(attrs)

    builder.json_ld.extend(collect_json_ld(html))
    return builder.freeze()


class HeadParser:
    """Streaming state machine over decoded document text.

    Usage:
        parser = HeadParser()
        for chunk in chunks:
            if parser.feed(chunk):
                break
        metadata = parser.close()
    """

    def __init__(self, *, max_chars: int | None = None) -> None:
        self._state = ParserState.ACCUMULATING
        self._buffer = ""
        # Offset from which the next boundary search starts
        self._scan_from = 0
        self._max_chars = max_chars
        self._metadata: Metadata | None = None

    @property
    def state(self) -> ParserState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is ParserState.DONE

    @property
    def metadata(self) -> Metadata:
        """Extraction result; only available once the parser is done."""
        if self._metadata is None:
            raise RuntimeError("HeadParser has not finished")
        return self._metadata

    def feed(self, text: str) -> bool:
        """Append a chunk and check for the end of the head section.

        Returns:
            True once the parser is done and wants no more input.
        """
        if self._state is ParserState.DONE:
            return True

        self._buffer += text
        m = _HEAD_END_RE.search(self._buffer, self._scan_from)
        if m is not None:
            self._buffer = self._buffer[: m.end()]
            self._finish()
            return True

        if self._max_chars is not None and len(self._buffer) >= self._max_chars:
            logger.info("head_truncated", max_chars=self._max_chars)
            self._buffer = self._buffer[: self._max_chars]
            self._finish()
            return True

        # A boundary match contains no "<" after its first character, so a
        # match spanning the next chunk can only start at the last "<".
        last_lt = self._buffer.rfind("<", self._scan_from)
        self._scan_from = last_lt if last_lt != -1 else len(self._buffer)
        return False

    def close(self) -> Metadata:
        """Signal end of stream and return the result."""
        if self._state is ParserState.ACCUMULATING:
            self._finish()
        return self.metadata

    def _finish(self) -> None:
        self._state = ParserState.DONE
        self._metadata = extract_head(self._buffer) if self._buffer else Metadata()
