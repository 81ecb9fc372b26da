"""WebP output provider."""

from typing import Iterable, Iterator

from PIL import Image

from ..render.frame import Frame
from ..render.raster_animation import composite_frames
from .base import PillowSequenceOutputProvider


class WebPOutputProvider(PillowSequenceOutputProvider):
    """Output provider for WebP format."""

    @property
    def output_format(self) -> str:
        return "webp"

    def frame_images(self, frames: Iterable[Frame]) -> Iterator[Image.Image]:
        return composite_frames(frames, mode="RGB")

    def save_options(self, first: Frame) -> dict[str, object]:
        return {
            "lossless": True,
            "quality": 100,
            "method": 4,
        }
