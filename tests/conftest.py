"""Shared fixtures for rainbow-roads tests."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

import pytest

from rainbow_roads.palette import Palette, build_palette
from rainbow_roads.tracks import Activity, GeoPoint, TrackPoint

START = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)

ActivityFactory = Callable[..., Activity]


def build_activity(
    samples: Sequence[tuple[float, float, float]],
    sport: str | None = None,
    start: datetime = START,
) -> Activity:
    """Build an activity from ``(seconds, lat, lon)`` samples."""
    points = [
        TrackPoint(start + timedelta(seconds=seconds), GeoPoint(lat, lon))
        for seconds, lat, lon in samples
    ]
    return Activity.from_points(points, sport=sport)


@pytest.fixture
def make_activity() -> ActivityFactory:
    return build_activity


@pytest.fixture
def loop_activities() -> list[Activity]:
    """Two activities around a small park; the second takes twice as long."""
    short = build_activity(
        [(0, 51.500, -0.120), (300, 51.502, -0.118), (600, 51.504, -0.120)],
        sport="running",
    )
    long = build_activity(
        [(0, 51.500, -0.124), (400, 51.503, -0.122), (800, 51.505, -0.121), (1200, 51.501, -0.116)],
        sport="cycling",
    )
    return [short, long]


@pytest.fixture
def palette() -> Palette:
    return build_palette("#fff,#000")


@pytest.fixture
def tiny_palette() -> Palette:
    """Two inks plus the transparent sentinel: A=0, B=1, TRANSPARENT=2."""
    return Palette(((0, 0, 0), (255, 255, 255), (0, 0, 0)))
