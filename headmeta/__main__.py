"""headmeta CLI entry point.

Delegates to ``headmeta.cli`` which houses the Click commands.
Kept minimal so that ``python -m headmeta`` and the ``headmeta``
console-script entry point both resolve here.
"""

from __future__ import annotations

from headmeta.cli import cli


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
