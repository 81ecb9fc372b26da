"""Paletted drawing surface with an only-darken write rule and a glow brush."""

from typing import Protocol

from ..palette import Palette
from .frame import Frame

_ORTHOGONAL = ((-1, 0), (0, -1), (1, 0), (0, 1))
_DIAGONAL = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class PixelSink(Protocol):
    """Anything that can be asked to consider writing a colour at a position."""

    def plot(self, x: int, y: int, color_index: int) -> None:
        ...


class Canvas:
    """Grid of palette indices where lower indices are more vivid and always win."""

    def __init__(self, width: int, height: int, fill: int):
        self.width = width
        self.height = height
        self.pixels = bytearray([fill]) * (width * height)

    def get(self, x: int, y: int) -> int:
        return self.pixels[y * self.width + x]

    def darken(self, x: int, y: int, color_index: int) -> bool:
        """
        Store ``color_index`` if it is lower than the current value.

        Returns:
            True if the pixel changed; positions outside the canvas never change
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        offset = y * self.width + x
        if color_index < self.pixels[offset]:
            self.pixels[offset] = color_index
            return True
        return False

    def to_frame(self, palette: Palette) -> Frame:
        """Hand the buffer over to a new frame; the canvas must not be drawn on afterwards."""
        frame = Frame(self.width, self.height, palette, self.pixels)
        self.pixels = bytearray()
        return frame


class GlowSink:
    """
    Brush that darkens a pixel and spreads a weaker glow around it.

    When the centre pixel changes and its index is in the vivid half of the
    range, the doubled index is offered to the four orthogonal neighbours; if
    that is still vivid, the index doubles again for the four diagonals.
    """

    def __init__(self, canvas: Canvas, background_index: int):
        self.canvas = canvas
        self.ceiling = background_index
        self.half_range = (background_index + 1) // 2

    def plot(self, x: int, y: int, color_index: int) -> None:
        darken = self.canvas.darken
        if not darken(x, y, color_index):
            return
        if color_index < self.half_range:
            color_index = min(color_index * 2, self.ceiling)
            for dx, dy in _ORTHOGONAL:
                darken(x + dx, y + dy, color_index)
        if color_index < self.half_range:
            color_index = min(color_index * 2, self.ceiling)
            for dx, dy in _DIAGONAL:
                darken(x + dx, y + dy, color_index)
