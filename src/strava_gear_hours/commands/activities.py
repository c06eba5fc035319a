"""Activity commands."""

from __future__ import annotations

from typing import Annotated, Any

import typer

from strava_gear_hours import hours as core
from strava_gear_hours.config import MAX_PAGE_SIZE
from strava_gear_hours.decorators import authenticated_command, human_columns
from strava_gear_hours.output import verbose_print

app = typer.Typer(no_args_is_help=True)


@app.command("list")
@authenticated_command
@human_columns(
    ("id", "ID"),
    ("name", "NAME"),
    ("start_date", "START"),
    ("moving_time", "MOVING (s)"),
    ("gear_id", "GEAR"),
)
def list_activities(
    client: Any,
    bike: Annotated[
        str | None,
        typer.Option("--bike", "-b", help="Only activities recorded with this gear name"),
    ] = None,
    since: Annotated[
        str | None,
        typer.Option(
            "--since",
            "-s",
            help="Only activities on or after this date (YYYY-MM-DD, UTC)",
        ),
    ] = None,
    page_size: Annotated[
        int | None,
        typer.Option(
            "--page-size",
            min=1,
            max=MAX_PAGE_SIZE,
            help="Activities requested per API call",
        ),
    ] = None,
) -> list:
    """List all activities, most recent first.

    Examples:
        strava-gear-hours activities list --bike "Road Bike"
        strava-gear-hours activities list --since 2016-01-01 | jq 'length'
    """
    from strava_gear_hours import cli

    filters = [core.by_date(core.parse_since(since))]
    if bike is not None:
        gear = core.get_gear_by_name(client, bike)
        verbose_print(f"'{bike}' is gear {gear.id}", cli.state.verbose)
        filters.insert(0, core.by_gear(gear))

    activities = core.list_all_activities(client, page_size or client.config.defaults.page_size)
    verbose_print(f"Fetched {len(activities)} activities", cli.state.verbose)

    return core.filter_activities(activities, *filters)
