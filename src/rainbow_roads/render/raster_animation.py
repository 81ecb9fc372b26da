"""Raster (Pillow) adapters turning paletted frames into encoder payloads."""

from typing import Iterable, Iterator

from PIL import Image

from .frame import Frame


def generate_raster_frames(frames: Iterable[Frame]) -> Iterator[Image.Image]:
    """Yield full-canvas paletted images, sentinel pixels marked transparent."""
    for frame in frames:
        yield frame.to_image()


def composite_frames(frames: Iterable[Frame], mode: str = "RGB") -> Iterator[Image.Image]:
    """
    Yield standalone images by pasting each frame's changed region over the last.

    Formats without per-frame transparency (JPEG stills, RGBA WebP frames)
    need every frame fully composited rather than as a delta.
    """
    composite: Image.Image | None = None
    for frame in frames:
        if composite is None:
            composite = frame.to_image().convert(mode)
        else:
            region = frame.cropped()
            sentinel = frame.transparent_index
            table = bytes(0 if index == sentinel else 255 for index in range(256))
            mask = Image.frombytes("L", region.size, region.tobytes().translate(table))
            composite.paste(region.convert(mode), frame.bounds.box[:2], mask)
        yield composite.copy()
