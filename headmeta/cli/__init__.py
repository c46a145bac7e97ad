"""headmeta CLI — Click command group and sub-commands.

- ``fetch`` — fetch a URL and print its head metadata as JSON
- ``config`` — ``config show``
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import structlog

from headmeta import __version__
from headmeta.config import load_config


def configure_logging(level: str) -> None:
    """Configure structlog to render to stderr, filtered by level."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[level.upper()]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@click.group()
@click.version_option(version=__version__, prog_name="headmeta")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.headmeta/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error", "critical"]),
    default=None,
    help="Override the configured log level.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """headmeta — extract <head> metadata from web pages."""
    config = load_config(config_path)
    configure_logging(log_level or config.log.level)
    ctx.obj = config


# Register sub-command modules
from headmeta.cli.config import config_group  # noqa: E402
from headmeta.cli.fetch import fetch  # noqa: E402

cli.add_command(fetch)
cli.add_command(config_group)
