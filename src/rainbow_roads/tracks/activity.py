"""Activity data model: recorded tracks as ordered, timestamped points."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable

from ..errors import EmptyInputError
from .geo import GeoPoint, haversine_distance


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so activities from any source compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True, slots=True)
class TrackPoint:
    """A single recorded position."""
    timestamp: datetime
    point: GeoPoint

    @property
    def lat(self) -> float:
        return self.point.lat

    @property
    def lon(self) -> float:
        return self.point.lon


@dataclass(frozen=True)
class Activity:
    """One recorded route; points are ordered by non-decreasing timestamp."""
    points: tuple[TrackPoint, ...]
    duration: timedelta
    distance: float = 0.0
    sport: str | None = None
    source: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.points:
            raise EmptyInputError("Activity has no points")

    @classmethod
    def from_points(
        cls,
        points: Iterable[TrackPoint],
        sport: str | None = None,
        source: str = "",
    ) -> "Activity":
        """
        Build an activity, deriving its duration and distance from the points.

        Args:
            points: Track points; sorted by timestamp, naive timestamps taken as UTC
            sport: Optional sport name reported by the source file
            source: Where the activity was loaded from, for messages

        Raises:
            EmptyInputError: If no points are given
        """
        ordered = tuple(
            sorted((TrackPoint(as_utc(tp.timestamp), tp.point) for tp in points), key=lambda tp: tp.timestamp)
        )
        if not ordered:
            raise EmptyInputError(f"Activity {source!r} has no points" if source else "Activity has no points")
        distance = 0.0
        for prev, cur in zip(ordered, ordered[1:]):
            distance += haversine_distance(prev.lat, prev.lon, cur.lat, cur.lon)
        return cls(
            points=ordered,
            duration=ordered[-1].timestamp - ordered[0].timestamp,
            distance=distance,
            sport=sport,
            source=source,
        )

    @property
    def start_time(self) -> datetime:
        return self.points[0].timestamp

    @property
    def date(self) -> datetime:
        return self.start_time

    @property
    def first(self) -> TrackPoint:
        return self.points[0]

    @property
    def last(self) -> TrackPoint:
        return self.points[-1]

    def __len__(self) -> int:
        return len(self.points)
