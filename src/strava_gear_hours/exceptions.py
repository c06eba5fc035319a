"""Custom exceptions for strava-gear-hours."""

from __future__ import annotations


class GearHoursError(Exception):
    """Base exception for all strava-gear-hours errors.

    Attributes:
        message: Human-readable error message
        exit_code: Exit code to use, set per subclass (default: 1)
        hint: Optional hint for resolution
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        hint: str | None = None,
    ) -> None:
        self.message = message
        self.hint = hint
        super().__init__(message)


class AuthenticationError(GearHoursError):
    """No usable access token, or Strava rejected it.

    Exit code: 2
    """

    exit_code = 2

    def __init__(
        self,
        message: str = "Not authenticated. Set STRAVA_ACCESS_TOKEN first.",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)


class TokenRefreshError(AuthenticationError):
    """Failed to refresh access token."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Token refresh failed: {reason}",
            hint="Export a fresh STRAVA_ACCESS_TOKEN.",
        )


class ConfigurationError(GearHoursError):
    """Missing environment variables or a broken config file.

    Exit code: 2
    """

    exit_code = 2


class MissingCredentialsError(ConfigurationError):
    """Client credentials not configured."""

    def __init__(self) -> None:
        super().__init__(
            "STRAVA_CLIENT_ID and STRAVA_CLIENT_SECRET environment variables required.",
            hint="They are only needed to refresh an expired token.",
        )


class APIError(GearHoursError):
    """Non-success response, transport failure or undecodable payload."""

    exit_code = 1

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(APIError):
    """Strava answered 429. Not retried."""

    def __init__(self) -> None:
        super().__init__("Rate limit exceeded.", status_code=429)
        self.hint = "Wait and try again."


class GearNotFoundError(GearHoursError):
    """No gear on the athlete's profile has the requested name."""

    exit_code = 1

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Gear not found: {name}",
            hint="Run 'strava-gear-hours gear list' to see available gear.",
        )
        self.name = name


class ValidationError(GearHoursError):
    """Input validation error.

    Exit code: 2 (user must fix input)
    """

    exit_code = 2
