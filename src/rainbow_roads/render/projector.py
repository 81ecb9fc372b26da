"""Geographic to canvas projection."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..constants import MARGIN_FRACTION, SCALE_FACTOR
from ..errors import InvalidBoundsError
from ..tracks.geo import mercator_meters
from .render_context import GeoBounds, RenderContext

if TYPE_CHECKING:
    from ..tracks.activity import Activity


@dataclass(frozen=True, slots=True)
class ProjectedPoint:
    """A track point in canvas space with its normalized progress."""
    x: int
    y: int
    p: float


@dataclass(frozen=True)
class Projector:
    """
    Single affine fit from web-Mercator metres to canvas pixels.

    Both axes share ``scale`` so the aspect ratio of the map is preserved.
    """
    min_x: float
    max_y: float
    scale: float
    width: int
    height: int

    @classmethod
    def fit(cls, bounds: GeoBounds, width: int) -> "Projector":
        """
        Fit the projection to the bounds of every point in the run.

        The canvas height is derived from the bounds at full scale, then the
        scale shrinks and the left/top edges are inset to leave a margin.

        Raises:
            InvalidBoundsError: If the bounds have no east-west extent
        """
        min_x, min_y = mercator_meters(bounds.min_lat, bounds.min_lon)
        max_x, max_y = mercator_meters(bounds.max_lat, bounds.max_lon)
        d_x, d_y = max_x - min_x, max_y - min_y
        if d_x <= 0:
            if d_y <= 0:
                raise InvalidBoundsError("All points are coincident, at least two distinct locations are required")
            raise InvalidBoundsError("All points share one longitude, the canvas scale is undefined")

        scale = width / d_x
        height = max(1, int(d_y * scale))
        return cls(
            min_x=min_x - MARGIN_FRACTION * d_x,
            max_y=max_y + MARGIN_FRACTION * d_y,
            scale=scale * SCALE_FACTOR,
            width=width,
            height=height,
        )

    @classmethod
    def from_context(cls, context: RenderContext) -> "Projector":
        return cls.fit(context.bounds, context.width)

    def project(self, lat: float, lon: float) -> tuple[int, int]:
        """Map degrees to integer pixel coordinates (truncated toward zero)."""
        x, y = mercator_meters(lat, lon)
        return int((x - self.min_x) * self.scale), int((self.max_y - y) * self.scale)

    def project_activity(self, act: "Activity", context: RenderContext) -> tuple[ProjectedPoint, ...]:
        projected = []
        for index, tp in enumerate(act.points):
            x, y = self.project(tp.lat, tp.lon)
            projected.append(ProjectedPoint(x, y, context.progress(act, index)))
        return tuple(projected)
