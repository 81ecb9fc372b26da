"""Helpers shared by the track file parsers."""

from datetime import datetime

from .activity import as_utc


class TrackParseError(Exception):
    """Raised when a track file cannot be read."""
    pass


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO 8601 timestamp (``Z`` suffix allowed); naive values are UTC."""
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(value))
    except ValueError as e:
        raise TrackParseError(f"Invalid timestamp: {text!r}") from e
