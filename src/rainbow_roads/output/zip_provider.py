"""ZIP archive of JPEG stills, one per frame."""

import zipfile
from io import BytesIO
from typing import Iterator

from ..render.frame import Frame
from ..render.raster_animation import composite_frames
from .base import OutputProvider


class ZipOutputProvider(OutputProvider):
    """Output provider writing every composited frame as ``<index>.jpg``."""

    def encode(self, frames: Iterator[Frame], frame_duration: int) -> bytes:
        frame_list = list(frames)
        if not frame_list:
            return b""

        buffer = BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_STORED) as archive:
            for index, image in enumerate(composite_frames(frame_list, mode="RGB")):
                still = BytesIO()
                image.save(still, format="jpeg", quality=90)
                archive.writestr(f"{index}.jpg", still.getvalue())
        return buffer.getvalue()
