"""Base class for output format providers."""

from io import BytesIO
from abc import ABC, abstractmethod
from typing import Iterable, Iterator

from PIL import Image

from ..render.frame import Frame
from ..render.raster_animation import generate_raster_frames


class OutputProvider(ABC):
    """Abstract base class for output format providers."""

    def __init__(self, path: str = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = path

    @abstractmethod
    def encode(self, frames: Iterator[Frame], frame_duration: int) -> bytes:
        """
        Encode frames into the output format.

        Args:
            frames: Iterator of delta-optimized frames
            frame_duration: Frame duration in milliseconds

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def write(self, data: bytes) -> None:
        """
        Write encoded data to a file.

        Args:
            data: Encoded data to write
        """
        if not self.path:
            raise ValueError("Output path not set")
        with open(self.path, "wb") as f:
            f.write(data)


class PillowSequenceOutputProvider(OutputProvider, ABC):
    """Template output provider for Pillow-supported animated image formats."""

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format identifier (for example, ``gif`` or ``png``)."""
        raise NotImplementedError

    def encode(self, frames: Iterator[Frame], frame_duration: int) -> bytes:
        frame_list = list(frames)
        if not frame_list:
            return b""

        images = list(self.frame_images(frame_list))
        buffer = BytesIO()
        images[0].save(
            buffer,
            format=self.output_format,
            save_all=True,
            append_images=images[1:],
            duration=max(1, frame_duration),
            loop=0,
            **self.save_options(frame_list[0]),
        )
        return buffer.getvalue()

    def frame_images(self, frames: Iterable[Frame]) -> Iterator[Image.Image]:
        """Images handed to Pillow; delta frames with transparency by default."""
        return generate_raster_frames(frames)

    def save_options(self, first: Frame) -> dict[str, object]:
        """Additional Pillow ``save`` kwargs for this format."""
        return {}
