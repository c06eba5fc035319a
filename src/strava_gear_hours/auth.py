"""OAuth token refresh."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

STRAVA_TOKEN_URL = "https://www.strava.com/oauth/token"


@dataclass
class AuthResult:
    """Tokens returned by the Strava token endpoint."""

    access_token: str
    refresh_token: str
    expires_at: int


def refresh_access_token(
    client_id: str,
    client_secret: str,
    refresh_token: str,
) -> AuthResult:
    """Exchange a refresh token for a new access token.

    Raises:
        httpx.HTTPError: If the request fails or Strava rejects it
        KeyError: If the response lacks a token field
    """
    with httpx.Client() as client:
        response = client.post(
            STRAVA_TOKEN_URL,
            data={
                "client_id": client_id,
                "client_secret": client_secret,
                "refresh_token": refresh_token,
                "grant_type": "refresh_token",
            },
        )
        response.raise_for_status()
        data = response.json()

    return AuthResult(
        access_token=data["access_token"],
        refresh_token=data["refresh_token"],
        expires_at=data["expires_at"],
    )
