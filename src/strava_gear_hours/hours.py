"""Gear lookup, activity listing, filtering and moving-time totals.

These functions only need an object with ``get_athlete_profile()`` and
``list_activities_page(page, per_page)``; in the CLI that is
:class:`strava_gear_hours.client.StravaClient`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from typing import Protocol

from strava_gear_hours.config import DEFAULT_PAGE_SIZE
from strava_gear_hours.exceptions import GearNotFoundError, ValidationError
from strava_gear_hours.models import Activity, AthleteProfile, Gear, as_utc

INITIAL_PAGE = 1

ActivityFilter = Callable[[Activity], bool]


class ActivitySource(Protocol):
    def get_athlete_profile(self) -> AthleteProfile: ...

    def list_activities_page(self, page: int, per_page: int) -> list[Activity]: ...


def list_all_activities(
    client: ActivitySource,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[Activity]:
    """Fetch every activity, one page at a time.

    A page holding fewer than ``page_size`` activities ends the listing, so
    when the total is a multiple of ``page_size`` one extra, empty page is
    requested. Errors from any page propagate and nothing is returned.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    activities: list[Activity] = []
    page = INITIAL_PAGE
    while True:
        batch = client.list_activities_page(page, page_size)
        activities.extend(batch)
        if len(batch) < page_size:
            return activities
        page += 1


def get_gear_by_name(client: ActivitySource, name: str) -> Gear:
    """Return the first gear on the athlete's profile named exactly ``name``.

    Raises:
        GearNotFoundError: If no gear has that name
    """
    profile = client.get_athlete_profile()
    for gear in profile.gear:
        if gear.name == name:
            return gear
    raise GearNotFoundError(name)


def by_gear(gear: Gear) -> ActivityFilter:
    """Keep activities recorded with ``gear``."""

    def select(activity: Activity) -> bool:
        return activity.gear_id == gear.id

    return select


def by_date(since: datetime | None) -> ActivityFilter:
    """Keep activities starting at or after ``since``; ``None`` keeps everything."""
    if since is None:
        return lambda activity: True

    cutoff = as_utc(since)

    def select(activity: Activity) -> bool:
        return activity.start_date >= cutoff

    return select


def filter_activities(
    activities: Iterable[Activity],
    *filters: ActivityFilter,
) -> list[Activity]:
    """Return the activities every filter keeps, in their original order."""
    return [activity for activity in activities if all(f(activity) for f in filters)]


def sum_moving_time(activities: Iterable[Activity]) -> timedelta:
    return timedelta(seconds=sum(activity.moving_time for activity in activities))


def parse_since(value: str | None) -> datetime | None:
    """Parse a ``--since`` value (``YYYY-MM-DD`` or full ISO8601) as UTC."""
    if not value:
        return None
    try:
        return as_utc(datetime.fromisoformat(value))
    except ValueError:
        raise ValidationError(
            f"Invalid date {value!r}",
            hint="Use YYYY-MM-DD, e.g. 2016-01-02.",
        ) from None
