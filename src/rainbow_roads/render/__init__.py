"""Rendering core: projection, frame synthesis and delta optimization."""

from .canvas import Canvas, GlowSink, PixelSink
from .frame import Frame, Rect
from .optimizer import EMPTY_BOUNDS, optimize_frames
from .projector import ProjectedPoint, Projector
from .raster_animation import composite_frames, generate_raster_frames
from .rasterizer import draw_line, line_points
from .render_context import GeoBounds, RenderContext
from .synthesizer import FrameSynthesizer

__all__ = [
    "Canvas",
    "EMPTY_BOUNDS",
    "Frame",
    "FrameSynthesizer",
    "GeoBounds",
    "GlowSink",
    "PixelSink",
    "ProjectedPoint",
    "Projector",
    "Rect",
    "RenderContext",
    "composite_frames",
    "draw_line",
    "generate_raster_frames",
    "line_points",
    "optimize_frames",
]
