"""Shared animation orchestration used by the CLI entry point."""

from dataclasses import dataclass
from typing import Sequence

from .constants import DEFAULT_FPS, DEFAULT_FRAMES, DEFAULT_WIDTH
from .output import resolve_output_provider
from .output.base import OutputProvider
from .palette import Palette, build_palette
from .render.frame import Frame
from .render.optimizer import optimize_frames
from .render.synthesizer import FrameSynthesizer
from .tracks.activity import Activity


@dataclass(frozen=True)
class RenderResult:
    """Optimized frames plus the palette index encoders must treat as transparent."""
    frames: tuple[Frame, ...]
    transparent_index: int

    @property
    def width(self) -> int:
        return self.frames[0].width

    @property
    def height(self) -> int:
        return self.frames[0].height


def render_animation(
    activities: Sequence[Activity],
    *,
    width: int = DEFAULT_WIDTH,
    frames: int = DEFAULT_FRAMES,
    palette: Palette | None = None,
) -> RenderResult:
    """Synthesize every frame, then delta-optimize the sequence once."""
    target_palette = palette or build_palette()
    synthesizer = FrameSynthesizer.from_activities(activities, target_palette, width, frames)
    rendered = synthesizer.render()
    optimize_frames(rendered)
    return RenderResult(tuple(rendered), target_palette.transparent_index)


def encode_animation(
    activities: Sequence[Activity],
    output_path: str,
    *,
    width: int = DEFAULT_WIDTH,
    frames: int = DEFAULT_FRAMES,
    fps: int = DEFAULT_FPS,
    palette: Palette | None = None,
    provider: OutputProvider | None = None,
) -> bytes:
    """Render activities and encode them for the given output path."""
    target_provider = provider or resolve_output_provider(output_path)
    result = render_animation(activities, width=width, frames=frames, palette=palette)
    return target_provider.encode(iter(result.frames), frame_duration=1000 // fps)
