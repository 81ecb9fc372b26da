"""GPX track parsing with gpxpy."""

import io
from typing import IO

import gpxpy
from gpxpy.gpx import GPXException

from .activity import Activity, TrackPoint
from .geo import GeoPoint
from .parsing import TrackParseError


def parse_gpx(source: IO[bytes], name: str = "") -> list[Activity]:
    """
    Parse a GPX document, one activity per track.

    Track points lacking a timestamp are skipped, and tracks left without
    any points produce no activity.
    """
    try:
        gpx = gpxpy.parse(io.TextIOWrapper(source, encoding="utf-8"))
    except GPXException as e:
        raise TrackParseError(f"Invalid GPX in {name or 'track file'}: {e}") from e

    activities: list[Activity] = []
    for track in gpx.tracks:
        points = [
            TrackPoint(point.time, GeoPoint(point.latitude, point.longitude))
            for segment in track.segments
            for point in segment.points
            if point.time is not None
        ]
        if points:
            activities.append(Activity.from_points(points, sport=track.type, source=name))
    return activities
