"""Fetch and parse the <head> of remote HTML documents."""

from __future__ import annotations

__version__ = "0.1.0"

from headmeta.errors import (  # noqa: E402
    HeadMetaError,
    MissingRedirectLocationError,
    StructuredDataParseError,
    TooManyRedirectsError,
    UnexpectedStatusError,
)
from headmeta.fetcher import HeadFetcher, fetch_head  # noqa: E402
from headmeta.parser import HeadParser, extract_head  # noqa: E402
from headmeta.types import Metadata  # noqa: E402

__all__ = [
    "HeadFetcher",
    "HeadMetaError",
    "HeadParser",
    "Metadata",
    "MissingRedirectLocationError",
    "StructuredDataParseError",
    "TooManyRedirectsError",
    "UnexpectedStatusError",
    "__version__",
    "extract_head",
    "fetch_head",
]
