"""Integer line rasterization."""

from typing import Iterator

from .canvas import PixelSink


def line_points(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield Bresenham pixels from ``(x0, y0)`` to ``(x1, y1)``, both endpoints included."""
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def draw_line(sink: PixelSink, x0: int, y0: int, x1: int, y1: int, color_index: int) -> None:
    """Offer every pixel of the segment to ``sink`` with the same colour."""
    for x, y in line_points(x0, y0, x1, y1):
        sink.plot(x, y, color_index)
