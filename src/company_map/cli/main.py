"""
company-map command line entry point.
"""

from typing import Any

import click

from ..shared.logging import get_logger, setup_logging
from .commands.explore import explore
from .commands.search import search


def _log_level(verbose: bool, quiet: bool) -> str:
    if quiet:
        return "WARNING"
    return "DEBUG" if verbose else "INFO"


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging and detail lines")
@click.option("--quiet", "-q", is_flag=True, help="Only print warnings, errors and the summary")
@click.option("--no-cache", is_flag=True, help="Disable registry response caching")
@click.pass_context
def cli(ctx: Any, verbose: bool, quiet: bool, no_cache: bool) -> None:
    """company-map - Explore who is behind a UK company."""
    ctx.ensure_object(dict)
    setup_logging(_log_level(verbose, quiet))
    ctx.obj["logger"] = get_logger()


cli.add_command(search)
cli.add_command(explore)


def main():
    cli()
