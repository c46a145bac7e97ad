"""Structured error codes for head fetching and parsing.

Fetch-level errors are fatal to a ``fetch_head`` call. Parse-level
errors are recovered where they occur and only logged.
Transport failures are ``httpx.HTTPError`` and pass through unchanged.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCategory(StrEnum):
    """Error category classification."""

    FETCH = "FETCH"
    PARSE = "PARSE"
    CONFIG = "CONFIG"


class HeadMetaError(Exception):
    """Base error with code, category, and resolution."""

    code: str = "HEADMETA_E000"
    category: ErrorCategory = ErrorCategory.FETCH
    resolution: str = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, object]:
        return {
            "error": {
                "code": self.code,
                "category": self.category.value,
                "message": self.message,
                "resolution": self.resolution,
            },
        }

    def format(self) -> str:
        return f"Error [{self.code}]: {self.message}\nResolution: {self.resolution}"


class TooManyRedirectsError(HeadMetaError):
    """Redirect chain exceeded the configured bound."""

    code = "HEADMETA_E001"
    resolution = "Fetch the final URL directly or raise fetch.max_redirects"

    def __init__(self, url: str, max_redirects: int) -> None:
        super().__init__(f"Too many redirects (>{max_redirects}) at {url}")
        self.url = url
        self.max_redirects = max_redirects


class MissingRedirectLocationError(HeadMetaError):
    """A 3xx response carried no Location header."""

    code = "HEADMETA_E002"
    resolution = "The server sent a broken redirect; check the URL"

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"Redirect with no location header ({status}) at {url}")
        self.url = url
        self.status = status


class UnexpectedStatusError(HeadMetaError):
    """Response status was neither 200 nor a redirect."""

    code = "HEADMETA_E003"
    resolution = "Only 200 responses are parsed; check the URL and access rights"

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"Request failed with status code {status}")
        self.url = url
        self.status = status


class StructuredDataParseError(HeadMetaError):
    """A JSON-LD block could not be decoded."""

    code = "HEADMETA_E004"
    category = ErrorCategory.PARSE
    resolution = "The block is skipped; remaining metadata is still extracted"
