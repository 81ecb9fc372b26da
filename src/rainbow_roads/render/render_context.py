"""Immutable inputs shared by projection and frame synthesis."""

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Sequence

from ..errors import CanvasSizeError, EmptyInputError

if TYPE_CHECKING:
    from ..tracks.activity import Activity


@dataclass(frozen=True, slots=True)
class GeoBounds:
    """Latitude/longitude extent of every rendered point, in degrees."""
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_lat + self.max_lat) / 2, (self.min_lon + self.max_lon) / 2


@dataclass(frozen=True)
class RenderContext:
    """Result of reducing the activity set once, before anything is drawn."""
    bounds: GeoBounds
    max_duration: timedelta
    width: int
    frame_count: int

    @classmethod
    def from_activities(
        cls,
        activities: Sequence["Activity"],
        width: int,
        frame_count: int,
    ) -> "RenderContext":
        """
        Reduce activities to their global bounds and longest duration.

        Args:
            activities: Activities to render
            width: Target canvas width in pixels
            frame_count: Number of frames to synthesize

        Raises:
            CanvasSizeError: If width or frame count is not positive
            EmptyInputError: If there are no activities or one has no points
        """
        if width <= 0:
            raise CanvasSizeError(f"Canvas width must be positive, got {width}")
        if frame_count <= 0:
            raise CanvasSizeError(f"Frame count must be positive, got {frame_count}")
        if not activities:
            raise EmptyInputError("No activities to render")

        min_lat = min_lon = float("inf")
        max_lat = max_lon = float("-inf")
        max_duration = timedelta()
        for act in activities:
            if not act.points:
                raise EmptyInputError("Activity has no points")
            max_duration = max(max_duration, act.duration)
            for tp in act.points:
                min_lat, max_lat = min(min_lat, tp.lat), max(max_lat, tp.lat)
                min_lon, max_lon = min(min_lon, tp.lon), max(max_lon, tp.lon)

        return cls(
            bounds=GeoBounds(min_lat, min_lon, max_lat, max_lon),
            max_duration=max_duration,
            width=width,
            frame_count=frame_count,
        )

    def progress(self, act: "Activity", index: int) -> float:
        """Normalized time of a point: elapsed since its activity start over the longest duration."""
        if not self.max_duration:
            return 0.0
        return (act.points[index].timestamp - act.start_time) / self.max_duration
