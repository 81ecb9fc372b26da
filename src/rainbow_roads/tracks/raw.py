"""JSON raw activity format, handy for fixtures and pre-processed exports.

The document is a list of activities::

    [{"sport": "running", "points": [["2024-01-01T08:00:00Z", 51.5, -0.1], ...]}]
"""

import json
from typing import IO, Any

from .activity import Activity, TrackPoint
from .geo import GeoPoint
from .parsing import TrackParseError, parse_timestamp


def parse_raw(source: IO[bytes], name: str = "") -> list[Activity]:
    """Parse activities from the JSON raw format."""
    try:
        data = json.load(source)
    except json.JSONDecodeError as e:
        raise TrackParseError(f"Invalid JSON in {name or 'raw input'}: {e}") from e
    if not isinstance(data, list):
        raise TrackParseError(f"{name or 'Raw input'} must hold a list of activities")

    activities: list[Activity] = []
    for index, entry in enumerate(data):
        points = [_parse_point(raw, name, index) for raw in _points_of(entry, name, index)]
        if points:
            activities.append(Activity.from_points(points, sport=entry.get("sport"), source=name))
    return activities


def _points_of(entry: Any, name: str, index: int) -> list[Any]:
    if not isinstance(entry, dict) or not isinstance(entry.get("points"), list):
        raise TrackParseError(f"Activity {index} in {name or 'raw input'} has no points list")
    return entry["points"]


def _parse_point(raw: Any, name: str, index: int) -> TrackPoint:
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise TrackParseError(
            f"Activity {index} in {name or 'raw input'} has a malformed point: {raw!r}"
        )
    time_text, lat, lon = raw
    try:
        point = GeoPoint(float(lat), float(lon))
    except (TypeError, ValueError) as e:
        raise TrackParseError(f"Invalid coordinates {lat},{lon} in {name or 'raw input'}") from e
    return TrackPoint(parse_timestamp(str(time_text)), point)
