"""Hours command - total moving time on one piece of gear."""

from __future__ import annotations

from typing import Annotated, Any

import typer

from strava_gear_hours import hours as core
from strava_gear_hours.config import MAX_PAGE_SIZE
from strava_gear_hours.decorators import emit_result, with_client
from strava_gear_hours.output import format_date, format_duration, verbose_print

app = typer.Typer(invoke_without_command=True)


@app.callback(invoke_without_command=True)
@with_client
def gear_hours(
    client: Any,
    bike: Annotated[
        str,
        typer.Option("--bike", "-b", help="Gear name exactly as shown on Strava"),
    ],
    since: Annotated[
        str | None,
        typer.Option(
            "--since",
            "-s",
            help="Only count activities on or after this date (YYYY-MM-DD, UTC)",
        ),
    ] = None,
    page_size: Annotated[
        int | None,
        typer.Option(
            "--page-size",
            min=1,
            max=MAX_PAGE_SIZE,
            help="Activities requested per API call (default from config, 100)",
        ),
    ] = None,
) -> None:
    """Total the moving time of every activity recorded with a bike.

    Examples:
        strava-gear-hours hours --bike "Road Bike"
        strava-gear-hours -f human hours -b "Road Bike" --since 2016-01-01
    """
    from strava_gear_hours import cli

    since_dt = core.parse_since(since)

    gear = core.get_gear_by_name(client, bike)
    verbose_print(f"'{bike}' is gear {gear.id}", cli.state.verbose)

    activities = core.list_all_activities(client, page_size or client.config.defaults.page_size)
    verbose_print(f"Fetched {len(activities)} activities", cli.state.verbose)

    activities = core.filter_activities(activities, core.by_gear(gear))
    verbose_print(f"{len(activities)} recorded with {gear.name}", cli.state.verbose)

    activities = core.filter_activities(activities, core.by_date(since_dt))
    if since_dt is not None:
        verbose_print(f"{len(activities)} since {since_dt.date()}", cli.state.verbose)

    total = core.sum_moving_time(activities)

    human_msg = (
        f"{gear.name}: {format_duration(total)} moving time over {len(activities)} activities"
    )
    if since_dt is not None:
        human_msg += f" since {format_date(since_dt)}"

    emit_result(
        {
            "gear": {"id": gear.id, "name": gear.name},
            "since": since_dt,
            "activity_count": len(activities),
            "moving_time": total,
            "moving_time_hms": format_duration(total),
        },
        human_msg,
    )
