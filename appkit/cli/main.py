"""
Main CLI entry point for appkit commands.

This module provides the main click command group and entry point
for all appkit CLI operations.
"""

import click

from appkit import __version__
from appkit.cli.commands.check_cmd import check_command
from appkit.cli.commands.tools_cmd import tools_command
from appkit.core.config import get_settings
from appkit.core.logging import setup_logging


@click.group(
    name="appkit",
    help="Tools for developing and checking integration apps."
)
@click.version_option(version=__version__, prog_name="appkit")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging output."
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """appkit CLI main command group."""
    settings = get_settings()
    setup_logging(
        log_level="DEBUG" if verbose else settings.LOG_LEVEL,
        debug=settings.DEBUG or verbose,
        json_format=settings.use_json_logs()
    )

    # Store verbose flag in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


# Register subcommands
cli.add_command(check_command)
cli.add_command(tools_command)


if __name__ == "__main__":
    cli()
