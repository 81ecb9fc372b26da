"""Activity selection by sport, date, duration, distance and region."""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from .activity import Activity
from .geo import Region

_DURATION_PATTERN = re.compile(r"(\d+(?:\.\d+)?)(h|ms|m|s)")
_DURATION_UNITS = {
    "h": timedelta(hours=1),
    "m": timedelta(minutes=1),
    "s": timedelta(seconds=1),
    "ms": timedelta(milliseconds=1),
}


def parse_duration(text: str) -> timedelta:
    """
    Parse durations such as ``15m``, ``1h30m`` or ``45s``.

    Raises:
        ValueError: If the text is not a sequence of number/unit pairs
    """
    compact = text.strip().replace(" ", "")
    if not compact:
        raise ValueError("Empty duration")
    total = timedelta()
    pos = 0
    for match in _DURATION_PATTERN.finditer(compact):
        if match.start() != pos:
            break
        value, unit = match.groups()
        total += float(value) * _DURATION_UNITS[unit]
        pos = match.end()
    if pos != len(compact):
        raise ValueError(f"Invalid duration: {text!r}")
    return total


def parse_date(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` date."""
    try:
        return date.fromisoformat(text.strip())
    except ValueError as e:
        raise ValueError(f"Invalid date: {text!r}, expected YYYY-MM-DD") from e


@dataclass(frozen=True)
class ActivityFilter:
    """Criteria an activity must meet to be rendered; unset fields match anything."""
    sports: tuple[str, ...] = ()
    after: date | None = None
    before: date | None = None
    min_duration: timedelta | None = None
    max_duration: timedelta | None = None
    min_distance: float | None = None
    max_distance: float | None = None
    starts_near: Region | None = None
    ends_near: Region | None = None
    passes_through: Region | None = None
    bounded_by: Region | None = None

    def apply(self, activities: Iterable[Activity]) -> list[Activity]:
        """Return the matching activities in their original order."""
        return [act for act in activities if self.matches(act)]

    def matches(self, act: Activity) -> bool:
        return (
            self._match_sport(act.sport)
            and self._match_date(act.date)
            and self._match_duration(act.duration)
            and self._match_distance(act.distance)
            and self._match_regions(act)
        )

    def _match_sport(self, sport: str | None) -> bool:
        if not self.sports:
            return True
        if sport is None:
            return False
        return any(s.lower() == sport.lower() for s in self.sports)

    def _match_date(self, when: datetime) -> bool:
        day = when.date()
        if self.after is not None and day < self.after:
            return False
        if self.before is not None and day > self.before:
            return False
        return True

    def _match_duration(self, duration: timedelta) -> bool:
        if self.min_duration is not None and duration < self.min_duration:
            return False
        if self.max_duration is not None and duration > self.max_duration:
            return False
        return True

    def _match_distance(self, distance: float) -> bool:
        if self.min_distance is not None and distance < self.min_distance:
            return False
        if self.max_distance is not None and distance > self.max_distance:
            return False
        return True

    def _match_regions(self, act: Activity) -> bool:
        if self.starts_near is not None and not self.starts_near.contains(act.first.lat, act.first.lon):
            return False
        if self.ends_near is not None and not self.ends_near.contains(act.last.lat, act.last.lon):
            return False
        if self.bounded_by is not None:
            if not all(self.bounded_by.contains(tp.lat, tp.lon) for tp in act.points):
                return False
        if self.passes_through is not None:
            return any(self.passes_through.contains(tp.lat, tp.lon) for tp in act.points)
        return True
