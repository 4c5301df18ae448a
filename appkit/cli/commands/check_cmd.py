"""
appkit check command implementation.

This command runs the conformance harness against an app directory and
reports every violation found.
"""

import json
import sys
from pathlib import Path

import click

from appkit.core.exceptions import AppLoadError
from appkit.harness.conformance import ConformanceReport, run_conformance


@click.command(
    name="check",
    help="Check an app directory against the integration app contract."
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
    help="Output format for check results."
)
@click.pass_context
def check_command(ctx: click.Context, directory: Path, format: str) -> None:
    """
    Check one app directory.

    Exit codes:
    0 - App conforms to the contract
    1 - Contract violations found
    2 - App directory could not be loaded
    """
    verbose = ctx.obj.get('verbose', False) if ctx.obj else False

    if verbose:
        click.echo(f"Checking app in {directory}...")

    try:
        report = run_conformance(directory)
    except AppLoadError as e:
        if format.lower() == "json":
            click.echo(json.dumps({"valid": False, "error": e.message, "details": e.details}, indent=2))
        else:
            click.echo(click.style(f"✗ {e.message}", fg='red', bold=True), err=True)
        sys.exit(2)

    if format.lower() == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        output_text_report(report, verbose)

    sys.exit(0 if report.valid else 1)


def output_text_report(report: ConformanceReport, verbose: bool) -> None:
    """Output a conformance report in human-readable text format."""
    failed = report.failed_checks()

    click.echo(f"\n{'='*60}")
    click.echo("Integration App Conformance Results")
    click.echo(f"{'='*60}")
    click.echo(f"Directory: {report.directory}")
    click.echo(f"App: {report.app_id}")
    click.echo(f"Checks run: {len(report.checks_run)}")
    click.echo(f"Checks failed: {click.style(str(len(failed)), fg='red' if failed else 'green')}")

    if verbose:
        click.echo(f"\n{'-'*60}")
        for check in report.checks_run:
            passed = check not in failed
            status = click.style("✓" if passed else "✗", fg='green' if passed else 'red')
            click.echo(f"  {status} {check}")

    if report.violations:
        click.echo(f"\nViolations ({len(report.violations)}):")
        for i, violation in enumerate(report.violations, 1):
            location = f" ({violation.location})" if violation.location else ""
            click.echo(f"  {i}. [{violation.check}]{location} {click.style(violation.message, fg='red')}")

    click.echo(f"\n{'='*60}")
    if report.valid:
        click.echo(click.style("✓ App conforms to the contract!", fg='green', bold=True))
    else:
        click.echo(click.style("✗ App has contract violations.", fg='red', bold=True))
        click.echo("Please fix the violations above and re-run the check.")

