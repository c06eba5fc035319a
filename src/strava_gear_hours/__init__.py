"""Total up the moving time recorded on a piece of Strava gear."""

__version__ = "0.1.0"
