"""Gear commands."""

from __future__ import annotations

from typing import Any

import typer

from strava_gear_hours.decorators import authenticated_command, human_columns

app = typer.Typer(no_args_is_help=True)


@app.command("list")
@authenticated_command
@human_columns(("id", "ID"), ("name", "NAME"), ("primary", "PRIMARY"), ("distance", "DISTANCE (m)"))
def list_gear(client: Any) -> list:
    """List the bikes and shoes on the athlete profile.

    Use the NAME column with 'hours --bike'.

    Examples:
        strava-gear-hours gear list
        strava-gear-hours gear list | jq '.[].name'
    """
    return client.get_athlete_profile().gear
