"""Stravalib client wrapper with token refresh and error translation."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
import pydantic
from stravalib import Client
from stravalib.exc import AccessUnauthorized, Fault, RateLimitExceeded

from strava_gear_hours import auth
from strava_gear_hours.config import Config, get_client_credentials
from strava_gear_hours.exceptions import (
    APIError,
    AuthenticationError,
    MissingCredentialsError,
    RateLimitError,
    TokenRefreshError,
)
from strava_gear_hours.models import Activity, AthleteProfile

T = TypeVar("T")


class StravaClient:
    """The two Strava capabilities the gear-hours pipeline needs.

    Requests go through stravalib's authenticated protocol layer. Every
    stravalib fault, transport failure or malformed payload surfaces as an
    ``APIError`` (or one of its auth/rate-limit siblings); nothing is retried.
    """

    def __init__(self, config: Config):
        self.config = config
        self.auth = config.auth
        self._client: Client | None = None

    @property
    def client(self) -> Client:
        """Get or create the stravalib Client."""
        if self._client is None:
            self._client = Client()
            if self.auth.access_token:
                self._client.access_token = self.auth.access_token
        return self._client

    def ensure_authenticated(self) -> None:
        """Ensure we have a token, refreshing it first if it has expired.

        Raises:
            AuthenticationError: If no access token is configured
            TokenRefreshError: If token refresh fails
        """
        if not self.auth.is_authenticated():
            raise AuthenticationError()

        # Tokens from STRAVA_ACCESS_TOKEN carry no expiry and are used as given
        if self.auth.is_expired() and self.auth.refresh_token:
            self.refresh_token()

    def refresh_token(self) -> None:
        """Refresh the access token and persist the new one.

        Raises:
            MissingCredentialsError: If client credentials not configured
            TokenRefreshError: If no refresh token available or Strava refuses
        """
        client_id, client_secret = get_client_credentials(self.config)
        if not client_id or not client_secret:
            raise MissingCredentialsError()

        if not self.auth.refresh_token:
            raise TokenRefreshError("No refresh token available")

        try:
            result = auth.refresh_access_token(client_id, client_secret, self.auth.refresh_token)
        except (httpx.HTTPError, KeyError) as e:
            raise TokenRefreshError(str(e)) from e

        self.auth.access_token = result.access_token
        self.auth.refresh_token = result.refresh_token
        self.auth.expires_at = result.expires_at

        # Rebuild the stravalib client with the new token
        self._client = None
        self.config.save()

    def _request(self, decode: Callable[[Any], T], url: str, **params: Any) -> T:
        self.ensure_authenticated()
        try:
            raw = self.client.protocol.get(url, **params)
            return decode(raw)
        except AccessUnauthorized as e:
            raise AuthenticationError(
                f"Unauthorized: {e}",
                hint="Your token may have expired or lack the activity:read_all scope.",
            ) from e
        except RateLimitExceeded as e:
            raise RateLimitError() from e
        except Fault as e:
            status_code = e.response.status_code if e.response is not None else None
            raise APIError(str(e), status_code=status_code) from e
        except OSError as e:
            raise APIError(f"Request to Strava failed: {e}") from e
        except pydantic.ValidationError as e:
            raise APIError(f"Unexpected response from {url}: {e}") from e

    def get_athlete_profile(self) -> AthleteProfile:
        """Get the authenticated athlete, including their gear."""
        return self._request(AthleteProfile.model_validate, "/athlete")

    def list_activities_page(self, page: int, per_page: int) -> list[Activity]:
        """Get one page of the athlete's activities, most recent first."""

        def decode(raw: Any) -> list[Activity]:
            if not isinstance(raw, list):
                raise APIError(f"Expected a list of activities, got {type(raw).__name__}")
            return [Activity.model_validate(item) for item in raw]

        return self._request(decode, "/athlete/activities", page=page, per_page=per_page)


def get_client(config: Config | None = None) -> StravaClient:
    """Get a configured Strava client, loading the default config if needed."""
    if config is None:
        config = Config.load()
    return StravaClient(config)
