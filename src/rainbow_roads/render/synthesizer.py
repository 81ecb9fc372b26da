"""Frame synthesis: comet trails swept along every activity over time."""

from typing import Iterator, Sequence

from ..constants import CLOCK_OVERSHOOT, TRAIL_LENGTH
from ..palette import Palette
from ..tracks.activity import Activity
from .canvas import Canvas, GlowSink
from .frame import Frame
from .projector import ProjectedPoint, Projector
from .rasterizer import draw_line
from .render_context import RenderContext


class FrameSynthesizer:
    """Renders frames from activities projected once onto a shared canvas size."""

    def __init__(
        self,
        activities: Sequence[Activity],
        context: RenderContext,
        palette: Palette,
        projector: Projector | None = None,
    ):
        """
        Initialize the synthesizer and project every activity.

        Args:
            activities: Activities to draw, in drawing order
            context: Reduced bounds, durations and canvas settings
            palette: Colours; its background index fills fresh frames
            projector: Projection to use; fitted from the context when omitted
        """
        self.context = context
        self.palette = palette
        self.projector = projector or Projector.from_context(context)
        self.width = self.projector.width
        self.height = self.projector.height
        self.tracks: list[tuple[ProjectedPoint, ...]] = [
            self.projector.project_activity(act, context) for act in activities
        ]

    @classmethod
    def from_activities(
        cls,
        activities: Sequence[Activity],
        palette: Palette,
        width: int,
        frame_count: int,
    ) -> "FrameSynthesizer":
        context = RenderContext.from_activities(activities, width, frame_count)
        return cls(activities, context, palette)

    @property
    def frame_count(self) -> int:
        return self.context.frame_count

    def threshold(self, frame_index: int) -> float:
        """Global animation clock; overshoots 1.0 so the last frames hold the finished trails."""
        return CLOCK_OVERSHOOT * (frame_index + 1) / self.frame_count

    def color_index(self, pp: float) -> int:
        """Map time since a point was visited, in ``[0, 1]``, onto the ink range."""
        return int(pp * self.palette.background_index)

    def render_frame(self, frame_index: int) -> Frame:
        """Synthesize one frame; frames are independent of each other."""
        threshold = self.threshold(frame_index)
        canvas = Canvas(self.width, self.height, self.palette.background_index)
        sink = GlowSink(canvas, self.palette.background_index)

        for track in self.tracks:
            prev: ProjectedPoint | None = None
            for point in track:
                pp = threshold - point.p
                if pp < 0:
                    # points are time ordered, the rest are still in the future
                    break
                if pp > TRAIL_LENGTH or (prev is not None and point.x == prev.x and point.y == prev.y):
                    prev = point
                    continue

                color_index = self.color_index(pp)
                if prev is not None and (abs(point.x - prev.x) > 1 or abs(point.y - prev.y) > 1):
                    draw_line(sink, prev.x, prev.y, point.x, point.y, color_index)
                else:
                    sink.plot(point.x, point.y, color_index)
                prev = point

        return canvas.to_frame(self.palette)

    def iter_frames(self) -> Iterator[Frame]:
        for frame_index in range(self.frame_count):
            yield self.render_frame(frame_index)

    def render(self) -> list[Frame]:
        """Synthesize every frame in order."""
        return list(self.iter_frames())
