"""Pydantic models for the parts of Strava API responses we read."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC, treating naive datetimes as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Gear(BaseModel):
    """A bike or pair of shoes from the athlete profile."""

    id: str
    name: str
    primary: bool = False
    distance: float | None = None


class Activity(BaseModel):
    """Summary of one logged activity."""

    id: int | None = None
    name: str = ""
    gear_id: str | None = None
    start_date: datetime
    moving_time: int = Field(default=0, ge=0)

    @field_validator("start_date")
    @classmethod
    def _normalize_start_date(cls, value: datetime) -> datetime:
        return as_utc(value)


class AthleteProfile(BaseModel):
    """The authenticated athlete, with the gear embedded in their profile."""

    id: int | None = None
    firstname: str | None = None
    lastname: str | None = None
    bikes: list[Gear] = Field(default_factory=list)
    shoes: list[Gear] = Field(default_factory=list)

    @field_validator("bikes", "shoes", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        # Strava sends null rather than [] for athletes without gear of a kind
        return [] if value is None else value

    @property
    def gear(self) -> list[Gear]:
        """Bikes followed by shoes, in the order Strava lists them."""
        return [*self.bikes, *self.shoes]
