"""CLI command: fetch."""

from __future__ import annotations

import asyncio
import json

import click
import httpx

from headmeta.config import Config
from headmeta.errors import HeadMetaError
from headmeta.fetcher import fetch_head


def _parse_header(value: str) -> tuple[str, str]:
    name, sep, content = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(
            f"expected 'Name: value', got {value!r}", param_hint="--header"
        )
    return name.strip(), content.strip()


@click.command()
@click.argument("url")
@click.option(
    "--header",
    "-H",
    "header_values",
    multiple=True,
    help="Extra request header as 'Name: value'. May be repeated.",
)
@click.option(
    "--indent",
    default=2,
    type=int,
    show_default=True,
    help="JSON indentation (0 for compact output).",
)
@click.pass_obj
def fetch(config: Config, url: str, header_values: tuple[str, ...], indent: int) -> None:
    """Fetch URL and print its head metadata as JSON."""
    headers = dict(_parse_header(v) for v in header_values)

    try:
        metadata = asyncio.run(fetch_head(url, headers, config=config.fetch))
    except HeadMetaError as exc:
        click.echo(exc.format(), err=True)
        raise SystemExit(1) from exc
    except httpx.HTTPError as exc:
        click.echo(f"✗ Failed: {url} — {exc}", err=True)
        raise SystemExit(1) from exc

    click.echo(
        json.dumps(metadata.to_dict(), indent=indent or None, ensure_ascii=False)
    )
