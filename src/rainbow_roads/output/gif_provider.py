"""GIF output provider."""

from ..render.frame import Frame
from .base import PillowSequenceOutputProvider


class GifOutputProvider(PillowSequenceOutputProvider):
    """Output provider for GIF format."""

    @property
    def output_format(self) -> str:
        return "gif"

    def save_options(self, first: Frame) -> dict[str, object]:
        # disposal 1 keeps the previous frame so sentinel pixels show through
        return {
            "optimize": False,
            "transparency": first.transparent_index,
            "disposal": 1,
        }
