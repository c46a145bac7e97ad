#!/usr/bin/env python3
"""Example: Fetch a page's <head> and print its metadata.

Only the head section is downloaded; the transfer stops at </head>.

Usage:
    uv run python examples/fetch_head.py https://example.com
"""

from __future__ import annotations

import asyncio
import sys

from headmeta.config import load_config
from headmeta.errors import HeadMetaError
from headmeta.fetcher import HeadFetcher


async def fetch(urls: list[str]) -> None:
    config = load_config()

    async with HeadFetcher(config.fetch) as fetcher:
        for url in urls:
            try:
                meta = await fetcher.fetch(url)
            except HeadMetaError as exc:
                print(f"Failed: {url}\n{exc.format()}")
                continue

            print(f"URL:         {url}")
            print(f"Title:       {meta.title}")
            print(f"Description: {meta.description}")
            print(f"Canonical:   {meta.canonical}")
            for key, value in meta.og.items():
                print(f"og:{key:<10} {value}")
            for key, value in meta.twitter.items():
                print(f"twitter:{key:<5} {value}")
            print(f"JSON-LD:     {len(meta.json_ld)} item(s)")
            print("─" * 60)


def main() -> None:
    urls = sys.argv[1:] or ["https://example.com"]
    asyncio.run(fetch(urls))


if __name__ == "__main__":
    main()
