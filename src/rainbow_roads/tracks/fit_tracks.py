"""Garmin FIT activity parsing with fitparse."""

from typing import IO

import fitparse

from .activity import Activity, TrackPoint
from .geo import GeoPoint
from .parsing import TrackParseError

# FIT stores positions as semicircles: 2^31 of them span 180 degrees
SEMICIRCLES_TO_DEGREES = 180.0 / 2**31


def parse_fit(source: IO[bytes], name: str = "") -> list[Activity]:
    """
    Parse a FIT activity file into a single activity.

    Only ``record`` messages carrying a timestamp and both coordinates become
    points. The sport comes from the ``sport`` message, or the ``session``
    message when a device omits it.
    """
    try:
        fit = fitparse.FitFile(source)
        points = [
            TrackPoint(
                timestamp,
                GeoPoint(lat * SEMICIRCLES_TO_DEGREES, lon * SEMICIRCLES_TO_DEGREES),
            )
            for record in fit.get_messages("record")
            if (timestamp := record.get_value("timestamp")) is not None
            and (lat := record.get_value("position_lat")) is not None
            and (lon := record.get_value("position_long")) is not None
        ]
        sport = _sport(fit)
    except fitparse.FitParseError as e:
        raise TrackParseError(f"Invalid FIT data in {name or 'track file'}: {e}") from e

    if not points:
        return []
    return [Activity.from_points(points, sport=sport, source=name)]


def _sport(fit: fitparse.FitFile) -> str | None:
    for message_type in ("sport", "session"):
        for message in fit.get_messages(message_type):
            sport = message.get_value("sport")
            if sport is not None:
                return str(sport)
    return None
