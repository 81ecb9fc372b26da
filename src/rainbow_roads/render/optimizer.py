"""Inter-frame delta optimization for animated image encoders."""

from typing import Sequence

from ..errors import FrameSequenceError
from .frame import Frame, Rect

# Placeholder bounds for a frame that carries no visible change
EMPTY_BOUNDS = Rect(0, 0, 1, 1)


def optimize_frames(frames: Sequence[Frame]) -> None:
    """
    Replace pixels that match the previous frame with the transparent sentinel.

    Frames are mutated in place. The first frame is left untouched with full
    bounds. Every later frame is compared against the previous frame's
    pixels as they were before this pass, its unchanged pixels become the
    sentinel, and its bounds shrink to the rectangle enclosing the changes.
    The pixel buffers keep their full size.

    This must run exactly once per sequence: a second pass would compare
    against sentinel-filled frames, so it is rejected.

    Raises:
        FrameSequenceError: If any frame was already optimized or sizes differ
    """
    if not frames:
        return
    if any(frame.optimized for frame in frames):
        raise FrameSequenceError("Frames have already been optimized")
    width, height = frames[0].width, frames[0].height
    if any(frame.width != width or frame.height != height for frame in frames):
        raise FrameSequenceError("All frames must have the same dimensions")

    first = frames[0]
    first.bounds = first.full_rect
    first.optimized = True

    previous = bytes(first.pixels)
    for frame in frames[1:]:
        original = bytes(frame.pixels)
        frame.bounds = _mask_unchanged(frame, original, previous)
        frame.optimized = True
        previous = original


def _mask_unchanged(frame: Frame, current: bytes, previous: bytes) -> Rect:
    """Sentinel every pixel equal to ``previous`` and return the bounds of the rest."""
    pixels = frame.pixels
    sentinel = frame.transparent_index
    width = frame.width
    min_x = min_y = max_x = max_y = -1

    for offset, (value, before) in enumerate(zip(current, previous)):
        if value == before:
            pixels[offset] = sentinel
            continue
        y, x = divmod(offset, width)
        if min_x < 0:
            min_x = max_x = x
            min_y = max_y = y
        else:
            min_x = min(min_x, x)
            max_x = max(max_x, x)
            max_y = y

    if min_x < 0:
        return EMPTY_BOUNDS
    return Rect(min_x, min_y, max_x + 1, max_y + 1)
