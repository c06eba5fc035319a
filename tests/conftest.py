"""Shared test fixtures for strava-gear-hours."""

from __future__ import annotations

import time
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

ATHLETE = {
    "id": 12345,
    "firstname": "Test",
    "lastname": "User",
    "bikes": [
        {"id": "123", "name": "road bike", "primary": True, "distance": 100.0},
        {"id": "456", "name": "my best bike", "primary": False, "distance": 200.0},
        {"id": "789", "name": "fat bike", "primary": False, "distance": 300.0},
    ],
    "shoes": [
        {"id": "g1", "name": "trail shoes", "primary": True, "distance": 50.0},
    ],
}

ACTIVITIES = [
    {
        "id": 1,
        "name": "ride 1",
        "gear_id": "123",
        "start_date": "2016-01-01T12:00:00Z",
        "moving_time": 3600,
    },
    {
        "id": 2,
        "name": "ride 2",
        "gear_id": "456",
        "start_date": "2016-02-01T12:00:00Z",
        "moving_time": 0,
    },
    {
        "id": 3,
        "name": "ride 3",
        "gear_id": "123",
        "start_date": "2016-01-02T12:00:00Z",
        "moving_time": 7200,
    },
    {
        "id": 4,
        "name": "ride 4",
        "gear_id": "456",
        "start_date": "2016-02-02T12:00:00Z",
        "moving_time": 2700,
    },
    {
        "id": 5,
        "name": "ride 5",
        "gear_id": "123",
        "start_date": "2016-01-03T12:00:00Z",
        "moving_time": 30,
    },
]


class FakeStravaAPI:
    """Stands in for stravalib's ``Client.protocol``.

    Serves ``/athlete`` and paged ``/athlete/activities`` from memory and
    records every request. Set ``errors[url]`` to make a URL raise.
    """

    def __init__(self, athlete: dict[str, Any], activities: list[dict[str, Any]]) -> None:
        self.athlete = athlete
        self.activities = activities
        self.errors: dict[str, Exception] = {}
        self.requests: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **params: Any) -> Any:
        self.requests.append((url, params))
        if url in self.errors:
            raise self.errors[url]
        if url == "/athlete":
            return self.athlete
        if url == "/athlete/activities":
            start = (params["page"] - 1) * params["per_page"]
            return self.activities[start : start + params["per_page"]]
        raise AssertionError(f"unexpected request to {url}")

    def activity_pages_requested(self) -> list[int]:
        return [params["page"] for url, params in self.requests if url == "/athlete/activities"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's Strava environment out of the tests."""
    for name in (
        "STRAVA_ACCESS_TOKEN",
        "STRAVA_REFRESH_TOKEN",
        "STRAVA_CLIENT_ID",
        "STRAVA_CLIENT_SECRET",
        "STRAVA_FORMAT",
        "STRAVA_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def tmp_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Set up a temporary config directory using XDG_CONFIG_HOME."""
    config_dir = tmp_path / "strava-gear-hours"
    config_dir.mkdir(parents=True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return config_dir


@pytest.fixture
def authenticated_config(tmp_config_dir: Path) -> Path:
    """Create a config file with a valid, unexpired token."""
    config_file = tmp_config_dir / "config.toml"
    config_file.write_text("""[auth]
access_token = "test_access_token_12345"
refresh_token = "test_refresh_token_67890"
expires_at = 9999999999

[defaults]
page_size = 100
""")
    return config_file


@pytest.fixture
def expired_config(tmp_config_dir: Path) -> Path:
    """Create a config file whose access token has expired."""
    config_file = tmp_config_dir / "config.toml"
    config_file.write_text("""[auth]
access_token = "stale_access_token"
refresh_token = "test_refresh_token_67890"
expires_at = 1000
""")
    return config_file


@pytest.fixture
def unauthenticated_config(tmp_config_dir: Path) -> Path:
    """Create a config file without authentication."""
    config_file = tmp_config_dir / "config.toml"
    config_file.write_text("""[auth]

[defaults]
page_size = 100
""")
    return config_file


@pytest.fixture
def env_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set up Strava API client credentials in environment."""
    monkeypatch.setenv("STRAVA_CLIENT_ID", "12345")
    monkeypatch.setenv("STRAVA_CLIENT_SECRET", "test_secret_abc123")


@pytest.fixture
def strava_api() -> FakeStravaAPI:
    return FakeStravaAPI(ATHLETE, ACTIVITIES)


@pytest.fixture
def mock_stravalib(strava_api: FakeStravaAPI) -> Generator[MagicMock, None, None]:
    """Mock stravalib.Client at the module boundary.

    Requests go through ``Client.protocol.get``, which is routed to the
    in-memory ``strava_api``.
    """
    with patch("strava_gear_hours.client.Client") as mock_client_class:
        mock_client = MagicMock()
        mock_client_class.return_value = mock_client
        mock_client.access_token = None
        mock_client.protocol.get.side_effect = strava_api.get
        yield mock_client


@pytest.fixture
def mock_httpx_oauth() -> Generator[MagicMock, None, None]:
    """Mock the httpx calls made to refresh a token."""
    with patch("strava_gear_hours.auth.httpx.Client") as mock_httpx_class:
        mock_httpx = MagicMock()
        mock_httpx_class.return_value.__enter__ = MagicMock(return_value=mock_httpx)
        mock_httpx_class.return_value.__exit__ = MagicMock(return_value=False)

        mock_response = MagicMock()
        mock_response.json.return_value = {
            "access_token": "new_access_token",
            "refresh_token": "new_refresh_token",
            "expires_at": int(time.time()) + 21600,  # 6 hours from now
        }
        mock_response.raise_for_status = MagicMock()
        mock_httpx.post.return_value = mock_response

        yield mock_httpx
