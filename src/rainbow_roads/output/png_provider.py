"""Animated PNG output provider."""

from PIL import PngImagePlugin

from ..render.frame import Frame
from .base import PillowSequenceOutputProvider


class PngOutputProvider(PillowSequenceOutputProvider):
    """Output provider for animated PNG (APNG) format."""

    @property
    def output_format(self) -> str:
        return "png"

    def save_options(self, first: Frame) -> dict[str, object]:
        return {
            "transparency": first.transparent_index,
            "disposal": PngImagePlugin.Disposal.OP_NONE,
            "blend": PngImagePlugin.Blend.OP_OVER,
        }
