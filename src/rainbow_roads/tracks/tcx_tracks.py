"""Training Center XML (TCX) parsing with xmltodict."""

from typing import IO, Any
from xml.parsers.expat import ExpatError

import xmltodict

from .activity import Activity, TrackPoint
from .geo import GeoPoint
from .parsing import TrackParseError, parse_timestamp

TCX_NAMESPACE = "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"

# Elements that may repeat; xmltodict returns a bare dict when only one is present
_REPEATED = ("Activity", "Lap", "Track", "Trackpoint")


def parse_tcx(source: IO[bytes], name: str = "") -> list[Activity]:
    """Parse a TCX document, one activity per ``Activity`` element."""
    try:
        document = xmltodict.parse(
            source,
            process_namespaces=True,
            namespaces={TCX_NAMESPACE: None},
            force_list=_REPEATED,
        )
    except ExpatError as e:
        raise TrackParseError(f"Malformed XML in {name or 'track file'}: {e}") from e

    root = document.get("TrainingCenterDatabase")
    if not isinstance(root, dict):
        raise TrackParseError(f"{name or 'Track file'} is not a TCX document")

    activities: list[Activity] = []
    for act in _section(root.get("Activities")).get("Activity", []):
        points = [
            point
            for lap in _section(act).get("Lap", [])
            for track in _section(lap).get("Track", [])
            for trackpoint in _section(track).get("Trackpoint", [])
            if (point := _track_point(trackpoint, name)) is not None
        ]
        if points:
            activities.append(Activity.from_points(points, sport=_section(act).get("@Sport"), source=name))
    return activities


def _section(value: Any) -> dict[str, Any]:
    """Empty elements come back as ``None``; treat them as having no children."""
    return value if isinstance(value, dict) else {}


def _track_point(trackpoint: Any, name: str) -> TrackPoint | None:
    trackpoint = _section(trackpoint)
    position = _section(trackpoint.get("Position"))
    time_text = trackpoint.get("Time")
    lat, lon = position.get("LatitudeDegrees"), position.get("LongitudeDegrees")
    if not time_text or lat is None or lon is None:
        return None
    try:
        point = GeoPoint(float(lat), float(lon))
    except ValueError as e:
        raise TrackParseError(f"Invalid coordinates {lat},{lon} in {name or 'TCX file'}") from e
    return TrackPoint(parse_timestamp(time_text), point)
