"""
appkit tools command implementation.

Lists the tools an app declares without a client, i.e. the tools that can
be enumerated offline.
"""

import asyncio
import json
import sys
from pathlib import Path

import click

from appkit.core.exceptions import AppKitException, AppLoadError
from appkit.harness.loader import load_app_dir


@click.command(
    name="tools",
    help="List the tools an app directory declares."
)
@click.option(
    "--dir", "-d", "directory",
    required=True,
    type=click.Path(path_type=Path),
    help="Folder containing app.py and metadata.json."
)
@click.option(
    "--format", "-f",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format for the tool list."
)
def tools_command(directory: Path, format: str) -> None:
    """List tools for one app directory."""
    try:
        loaded = load_app_dir(directory)
    except AppLoadError as e:
        click.echo(click.style(f"✗ {e.message}", fg='red', bold=True), err=True)
        sys.exit(2)

    app = loaded.descriptor
    if app is None or "toolkit" not in (getattr(app, "features", None) or ()):
        click.echo(click.style("✗ App does not provide the 'toolkit' feature.", fg='red'), err=True)
        sys.exit(1)

    try:
        tools = asyncio.run(app.get_tools())
    except (AppKitException, NotImplementedError) as e:
        click.echo(click.style(f"✗ Could not list tools: {e}", fg='red'), err=True)
        sys.exit(1)

    if format.lower() == "json":
        click.echo(json.dumps({name: spec.to_dict() for name, spec in tools.items()}, indent=2))
        return

    if not tools:
        click.echo("No tools can be listed without a client.")
        return

    click.echo(f"Tools ({len(tools)}):")
    for name, spec in tools.items():
        click.echo(f"  - {click.style(name, bold=True)}: {spec.title or spec.description}")
        if spec.title:
            click.echo(f"      {spec.description}")
