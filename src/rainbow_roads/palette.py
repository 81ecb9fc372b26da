"""Colour schemes: gradient parsing and paletted colour tables."""

from dataclasses import dataclass

from PIL import ImageColor

from .constants import DEFAULT_COLORS, PALETTE_SIZE, TRANSPARENT_COLOR

RGB = tuple[int, int, int]


class PaletteError(ValueError):
    """Raised for malformed colour schemes or palette sizes."""
    pass


@dataclass(frozen=True)
class ColorStop:
    color: RGB
    position: float | None = None


@dataclass(frozen=True)
class Palette:
    """
    Ordered colours for paletted frames.

    Index 0 is the freshest ink, higher indices fade toward the background,
    and the final entry is the transparent sentinel meaning "unchanged from
    the previous frame".
    """
    colors: tuple[RGB, ...]

    def __post_init__(self) -> None:
        if len(self.colors) < 2:
            raise PaletteError("Palette needs at least one ink colour and the transparent sentinel")
        if len(self.colors) > PALETTE_SIZE:
            raise PaletteError(f"Palette cannot exceed {PALETTE_SIZE} colours")

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def transparent_index(self) -> int:
        return len(self.colors) - 1

    @property
    def background_index(self) -> int:
        """Least vivid ink, used to fill freshly allocated frames."""
        return len(self.colors) - 2

    def flatten(self) -> list[int]:
        """Flat ``[r, g, b, r, g, b, ...]`` list as expected by ``Image.putpalette``."""
        return [channel for color in self.colors for channel in color]


def parse_color_scheme(scheme: str) -> list[ColorStop]:
    """
    Parse a CSS linear-gradient inspired scheme such as ``red,yellow@10%,blue``.

    Raises:
        PaletteError: If a colour or position cannot be parsed
    """
    stops: list[ColorStop] = []
    for part in scheme.split(","):
        part = part.strip()
        if not part:
            raise PaletteError(f"Empty colour stop in {scheme!r}")
        color_text, _, position_text = part.partition("@")
        try:
            color = ImageColor.getrgb(color_text.strip())
        except ValueError as e:
            raise PaletteError(f"Unknown colour {color_text.strip()!r}") from e
        position = _parse_position(position_text.strip()) if position_text else None
        stops.append(ColorStop(color[:3], position))
    return stops


def _parse_position(text: str) -> float:
    try:
        if text.endswith("%"):
            value = float(text[:-1]) / 100
        else:
            value = float(text)
    except ValueError as e:
        raise PaletteError(f"Invalid colour stop position {text!r}") from e
    if not 0 <= value <= 1:
        raise PaletteError(f"Colour stop position {text!r} must be within 0 and 1")
    return value


def _resolve_positions(stops: list[ColorStop]) -> list[tuple[float, RGB]]:
    """Fill in missing positions the way CSS gradients do."""
    positions = [stop.position for stop in stops]
    if positions[0] is None:
        positions[0] = 0.0
    if positions[-1] is None:
        positions[-1] = 1.0

    i = 0
    while i < len(positions):
        if positions[i] is not None:
            i += 1
            continue
        start = i - 1
        end = i
        while positions[end] is None:
            end += 1
        lo, hi = positions[start], positions[end]
        span = end - start
        for k in range(start + 1, end):
            positions[k] = lo + (hi - lo) * (k - start) / span
        i = end

    resolved = [(float(pos), stop.color) for pos, stop in zip(positions, stops)]
    for (prev_pos, _), (pos, _) in zip(resolved, resolved[1:]):
        if pos < prev_pos:
            raise PaletteError("Colour stop positions must not decrease")
    return resolved


def _sample(stops: list[tuple[float, RGB]], t: float) -> RGB:
    if t <= stops[0][0]:
        return stops[0][1]
    for (p0, c0), (p1, c1) in zip(stops, stops[1:]):
        if t <= p1:
            if p1 == p0:
                return c1
            f = (t - p0) / (p1 - p0)
            return tuple(round(a + (b - a) * f) for a, b in zip(c0, c1))  # type: ignore[return-value]
    return stops[-1][1]


def build_palette(scheme: str = DEFAULT_COLORS, size: int = PALETTE_SIZE) -> Palette:
    """
    Sample a colour scheme into ``size - 1`` inks plus the transparent sentinel.

    Args:
        scheme: Colour scheme string, freshest colour first
        size: Total palette size including the sentinel

    Returns:
        The palette
    """
    if size < 2:
        raise PaletteError("Palette size must be at least 2")
    stops = _resolve_positions(parse_color_scheme(scheme))
    inks = size - 1
    if inks == 1:
        colors = [stops[0][1]]
    else:
        colors = [_sample(stops, i / (inks - 1)) for i in range(inks)]
    colors.append(TRANSPARENT_COLOR)
    return Palette(tuple(colors))
