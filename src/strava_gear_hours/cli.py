"""Main CLI entry point."""

from __future__ import annotations

import sys
from typing import Annotated

import typer

from strava_gear_hours import __version__
from strava_gear_hours.commands import activities, auth, gear, hours
from strava_gear_hours.output import OutputFormat

# Exit codes
EXIT_ERROR = 1


class State:
    """Global CLI state."""

    format: OutputFormat = OutputFormat.json
    fields: list[str] | None = None
    no_header: bool = False
    verbose: bool = False
    quiet: bool = False
    config_path: str | None = None


state = State()

app = typer.Typer(
    name="strava-gear-hours",
    help="How long have you spent on that bike? Moving time per piece of Strava gear.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"strava-gear-hours {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format",
            envvar="STRAVA_FORMAT",
        ),
    ] = OutputFormat.json,
    fields: Annotated[
        str | None,
        typer.Option(
            "--fields",
            help="Comma-separated list of fields to include in output",
        ),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="Omit header row in CSV/TSV output"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose output to stderr"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress hints on errors"),
    ] = False,
    config: Annotated[
        str | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file",
            envvar="STRAVA_CONFIG",
        ),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Global options applied to all commands."""
    if verbose and quiet:
        print("error: --verbose and --quiet are mutually exclusive", file=sys.stderr)
        raise typer.Exit(EXIT_ERROR)

    state.format = format
    state.fields = fields.split(",") if fields else None
    state.no_header = no_header
    state.verbose = verbose
    state.quiet = quiet
    state.config_path = config


app.add_typer(hours.app, name="hours", help="Total moving time on a piece of gear")
app.add_typer(activities.app, name="activities", help="Activities filtered by gear and date")
app.add_typer(gear.app, name="gear", help="Gear on the athlete profile")
app.add_typer(auth.app, name="auth", help="Token status and refresh")


if __name__ == "__main__":
    app()
