"""Paletted animation frames handed from synthesis to the encoders."""

from dataclasses import dataclass

from PIL import Image

from ..palette import Palette


@dataclass(frozen=True, slots=True)
class Rect:
    """Half-open pixel rectangle ``[left, right) x [top, bottom)``."""
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Pillow box tuple."""
        return self.left, self.top, self.right, self.bottom

    def contains(self, other: "Rect") -> bool:
        return (
            self.left <= other.left
            and self.top <= other.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


class Frame:
    """
    A palette-indexed pixel buffer plus the region a consumer must encode.

    The buffer always covers the full canvas. After delta optimization,
    ``bounds`` narrows to the pixels that changed since the previous frame
    and everything else holds the palette's transparent sentinel.
    """

    def __init__(self, width: int, height: int, palette: Palette, pixels: bytearray | None = None):
        """
        Initialize a frame.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            palette: Colours the pixel indices refer to
            pixels: Row-major indices, ``width * height`` long; background filled when omitted
        """
        if pixels is None:
            pixels = bytearray([palette.background_index]) * (width * height)
        if len(pixels) != width * height:
            raise ValueError(f"Expected {width * height} pixels, got {len(pixels)}")
        self.width = width
        self.height = height
        self.palette = palette
        self.pixels = pixels
        self.bounds = self.full_rect
        self.optimized = False

    @property
    def full_rect(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    @property
    def transparent_index(self) -> int:
        return self.palette.transparent_index

    def pixel_at(self, x: int, y: int) -> int:
        return self.pixels[y * self.width + x]

    def to_image(self) -> Image.Image:
        """Full-canvas ``P`` image with the sentinel marked as transparency."""
        image = Image.frombytes("P", (self.width, self.height), bytes(self.pixels))
        image.putpalette(self.palette.flatten())
        image.info["transparency"] = self.transparent_index
        return image

    def cropped(self) -> Image.Image:
        """Image of the bounding region only."""
        return self.to_image().crop(self.bounds.box)

    def __repr__(self) -> str:
        return f"Frame({self.width}x{self.height}, bounds={self.bounds.box}, optimized={self.optimized})"
