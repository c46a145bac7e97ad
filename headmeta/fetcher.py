"""Async head fetcher — follows redirects and streams the body into a HeadParser."""

from __future__ import annotations

import ssl
import time
from collections.abc import Mapping
from pathlib import Path
from types import TracebackType
from urllib.parse import urljoin

import httpx
import structlog

from headmeta.config import FetchConfig
from headmeta.errors import (
    MissingRedirectLocationError,
    TooManyRedirectsError,
    UnexpectedStatusError,
)
from headmeta.parser.head import HeadParser
from headmeta.types import Metadata

logger = structlog.get_logger()

# System CA bundles, tried in order before httpx's bundled certifi
_CA_BUNDLES: tuple[str, ...] = (
    "/etc/ssl/certs/ca-certificates.crt",
    "/etc/pki/tls/certs/ca-bundle.crt",
    "/etc/ssl/cert.pem",
    "/etc/pki/ca-trust/extracted/pem/tls-ca-bundle.pem",
)


def tls_verify(enabled: bool) -> ssl.SSLContext | bool:
    """Return the ``verify`` argument for the HTTP client.

    False when verification is disabled, an SSL context for the first
    system CA bundle found, otherwise True.
    """
    if not enabled:
        return False
    cafile = next((p for p in _CA_BUNDLES if Path(p).is_file()), None)
    return ssl.create_default_context(cafile=cafile) if cafile else True


def build_headers(user_agent: str, extra: Mapping[str, str] | None) -> httpx.Headers:
    """Merge request headers.

    The default User-Agent may be replaced by the caller; Accept is
    always ``text/html``.
    """
    headers = httpx.Headers({"User-Agent": user_agent})
    if extra:
        headers.update(extra)
    headers["Accept"] = "text/html"
    return headers


def _is_redirect(status: int) -> bool:
    return str(status)[0] == "3"


class HeadFetcher:
    """Fetch a page's ``<head>`` and extract its metadata.

    Usage:
        async with HeadFetcher(config) as fetcher:
            metadata = await fetcher.fetch("https://example.com")

    A fetcher may be shared by concurrent ``fetch`` calls; each call
    owns its redirect counter and parser.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or FetchConfig()
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                follow_redirects=False,
                timeout=self._config.timeout,
                verify=tls_verify(self._config.verify_tls),
            )
            self._owns_client = True
        return self._client

    async def fetch(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Metadata:
        """Fetch ``url`` and return metadata from its head section.

        Args:
            url: Absolute http(s) URL.
            headers: Extra request headers. ``Accept`` cannot be overridden.

        Returns:
            Frozen Metadata.

        Raises:
            TooManyRedirectsError: Redirect bound exceeded.
            MissingRedirectLocationError: 3xx without a Location header.
            UnexpectedStatusError: Any status other than 200 or 3xx.
            httpx.HTTPError: Transport failures, unchanged.
        """
        client = await self._get_client()
        request_headers = build_headers(self._config.user_agent, headers)
        start = time.monotonic()
        current = url
        redirects = 0

        while True:
            try:
                async with client.stream(
                    "GET", current, headers=request_headers
                ) as response:
                    status = response.status_code

                    if _is_redirect(status):
                        location = response.headers.get("location")
                        if not location:
                            raise MissingRedirectLocationError(current, status)
                        if redirects >= self._config.max_redirects:
                            raise TooManyRedirectsError(
                                current, self._config.max_redirects
                            )
                        target = urljoin(current, location)
                        logger.debug(
                            "head_fetch_redirect",
                            url=current,
                            status=status,
                            location=target,
                            hop=redirects + 1,
                        )
                        # Leaving the context closes the unread body
                        current = target
                        redirects += 1
                        continue

                    if status != 200:
                        raise UnexpectedStatusError(current, status)

                    metadata = await self._read_head(response)
            except httpx.HTTPError as exc:
                logger.warning(
                    "head_fetch_transport_error",
                    url=current,
                    error=str(exc),
                )
                raise

            logger.info(
                "head_fetch_done",
                url=url,
                final_url=current,
                redirects=redirects,
                title=(metadata.title or "")[:60],
                elapsed_ms=round(_elapsed(start), 1),
            )
            return metadata

    async def _read_head(self, response: httpx.Response) -> Metadata:
        """Feed body text into a fresh parser until it is done."""
        parser = HeadParser(max_chars=self._config.max_head_chars)
        async for chunk in response.aiter_text():
            if parser.feed(chunk):
                # Remaining body is dropped when the stream context closes
                break
        return parser.close()

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> HeadFetcher:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()


async def fetch_head(
    url: str,
    headers: Mapping[str, str] | None = None,
    *,
    config: FetchConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> Metadata:
    """Fetch a URL's head section and return its metadata.

    One-shot wrapper around ``HeadFetcher``.
    """
    async with HeadFetcher(config, client=client) as fetcher:
        return await fetcher.fetch(url, headers)


def _elapsed(start: float) -> float:
    """Calculate elapsed milliseconds."""
    return (time.monotonic() - start) * 1000
