"""Configuration loaded from an XDG config file and the environment."""

from __future__ import annotations

import os
import stat
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from strava_gear_hours.exceptions import ConfigurationError

APP_NAME = "strava-gear-hours"
DEFAULT_PAGE_SIZE = 100
# Strava caps per_page at 200
MAX_PAGE_SIZE = 200


def get_config_dir() -> Path:
    """Get XDG config directory."""
    if xdg := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get default config file path."""
    return get_config_dir() / "config.toml"


@dataclass
class AuthConfig:
    """Stored Strava tokens."""

    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = None

    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def is_expired(self) -> bool:
        """Tokens without a known expiry are never treated as expired."""
        if self.expires_at is None:
            return False
        return time.time() >= self.expires_at


@dataclass
class DefaultsConfig:
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass
class Config:
    """Main configuration."""

    auth: AuthConfig = field(default_factory=AuthConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    client_id: str | None = None
    client_secret: str | None = None
    path: Path | None = None

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration from file, then apply environment overrides."""
        config_path = Path(path) if path else get_config_path()
        if config_path.exists():
            config = cls._load_from_file(config_path)
        else:
            config = cls()
        config.path = config_path

        config._apply_env_overrides()
        return config

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid config file {path}: {e}") from e

        config = cls()

        if client_data := data.get("client"):
            config.client_id = client_data.get("id")
            config.client_secret = client_data.get("secret")

        if auth_data := data.get("auth"):
            config.auth = AuthConfig(
                access_token=auth_data.get("access_token"),
                refresh_token=auth_data.get("refresh_token"),
                expires_at=auth_data.get("expires_at"),
            )

        if defaults_data := data.get("defaults"):
            page_size = defaults_data.get("page_size", DEFAULT_PAGE_SIZE)
            if not isinstance(page_size, int) or page_size < 1:
                raise ConfigurationError(
                    f"Invalid config file {path}: page_size must be a positive integer"
                )
            config.defaults = DefaultsConfig(page_size=page_size)

        return config

    def _apply_env_overrides(self) -> None:
        if token := os.environ.get("STRAVA_ACCESS_TOKEN"):
            self.auth.access_token = token
            # The stored expiry belongs to the stored token
            self.auth.expires_at = None
        if refresh := os.environ.get("STRAVA_REFRESH_TOKEN"):
            self.auth.refresh_token = refresh

    def save(self, path: Path | None = None) -> None:
        """Write configuration as TOML, readable by the owner only."""
        config_path = path or self.path or get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.parent.chmod(stat.S_IRWXU)

        lines = []

        if self.client_id or self.client_secret:
            lines.append("[client]")
            if self.client_id:
                lines.append(f'id = "{self.client_id}"')
            if self.client_secret:
                lines.append(f'secret = "{self.client_secret}"')
            lines.append("")

        lines.append("[auth]")
        if self.auth.access_token:
            lines.append(f'access_token = "{self.auth.access_token}"')
        if self.auth.refresh_token:
            lines.append(f'refresh_token = "{self.auth.refresh_token}"')
        if self.auth.expires_at:
            lines.append(f"expires_at = {self.auth.expires_at}")
        lines.append("")

        lines.append("[defaults]")
        lines.append(f"page_size = {self.defaults.page_size}")
        lines.append("")

        config_path.write_text("\n".join(lines))
        config_path.chmod(stat.S_IRUSR | stat.S_IWUSR)


def get_client_credentials(config: Config | None = None) -> tuple[str | None, str | None]:
    """Get client ID and secret.

    Priority: environment variables > config file
    """
    client_id = os.environ.get("STRAVA_CLIENT_ID")
    client_secret = os.environ.get("STRAVA_CLIENT_SECRET")

    if not client_id or not client_secret:
        if config is None:
            config = Config.load()
        client_id = client_id or config.client_id
        client_secret = client_secret or config.client_secret

    return client_id, client_secret
