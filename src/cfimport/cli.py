"""
Main CLI dispatcher for cfimport.

Usage:
    cfimport import --space-id SPACE --access-token TOKEN
    cfimport content-types
    cfimport config [show|get|set|reset|path]
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from cfimport import __version__

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False, dry_run: bool = False):
        self.verbose = verbose
        self.dry_run = dry_run
        self.console = console


def setup_logging(verbose: bool) -> None:
    """Send cfimport log records to the console, at DEBUG when verbose."""
    logger = logging.getLogger("cfimport")
    logger.handlers.clear()
    if verbose:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="cfimport")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-n", "--dry-run", is_flag=True, help="Preview without making changes")
@click.pass_context
def main(ctx: click.Context, verbose: bool, dry_run: bool) -> None:
    """Contentful to static-site importer.

    Pulls posts and pages from a Contentful space and writes them as
    Jekyll-style files with a YAML header.
    """
    ctx.ensure_object(dict)
    ctx.obj = Context(verbose=verbose, dry_run=dry_run)
    setup_logging(verbose)


# Import and register commands (imports after main definition intentional)
from cfimport.config.commands import config  # noqa: E402
from cfimport.importer.commands import content_types_cmd, import_cmd  # noqa: E402

main.add_command(import_cmd)
main.add_command(content_types_cmd)
main.add_command(config)


if __name__ == "__main__":
    main()
