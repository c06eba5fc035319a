"""Authentication commands."""

from __future__ import annotations

from typing import Any

import typer

from strava_gear_hours.config import get_client_credentials
from strava_gear_hours.decorators import emit_output, emit_result, with_client
from strava_gear_hours.exceptions import TokenRefreshError

app = typer.Typer(no_args_is_help=True)


@app.command("status")
@with_client
def status(client: Any) -> None:
    """Show whether a token is configured and whether it has expired."""
    auth = client.auth
    client_id, client_secret = get_client_credentials(client.config)

    emit_output(
        {
            "authenticated": auth.is_authenticated(),
            "expires_at": auth.expires_at,
            "expired": auth.is_expired() if auth.is_authenticated() else None,
            "can_refresh": bool(auth.refresh_token and client_id and client_secret),
            "config_path": str(client.config.path),
        }
    )


@app.command("refresh")
@with_client
def refresh(client: Any) -> None:
    """Force refresh the access token and save it to the config file.

    Requires a refresh token plus STRAVA_CLIENT_ID and STRAVA_CLIENT_SECRET.
    """
    if not client.auth.refresh_token:
        raise TokenRefreshError("No refresh token available")

    client.refresh_token()

    emit_result(
        {"expires_at": client.auth.expires_at},
        f"Token refreshed (expires {client.auth.expires_at})",
    )
