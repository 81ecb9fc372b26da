"""CLI interface for rainbow-roads."""

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.progress import track

from .animation_pipeline import encode_animation
from .console_printer import ActivityConsolePrinter
from .constants import (
    DEFAULT_COLORS,
    DEFAULT_FORMAT,
    DEFAULT_FPS,
    DEFAULT_FRAMES,
    DEFAULT_OUTPUT,
    DEFAULT_WIDTH,
    ENV_COLORS,
    ENV_FRAMES,
    ENV_WIDTH,
)
from .errors import RenderError
from .output import (
    extension_for_output_format,
    resolve_output_provider,
    supported_output_formats,
)
from .palette import Palette, PaletteError, build_palette
from .tracks import (
    Activity,
    ActivityFilter,
    InputPathError,
    Region,
    load_activities,
    parse_date,
    parse_distance,
    parse_duration,
    scan_inputs,
)

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats())


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    inputs: list[str] = typer.Argument(
        None,
        help="Activity files, directories, glob patterns or zip archives (default: current directory)",
    ),
    output: str = typer.Option(
        DEFAULT_OUTPUT,
        "--output",
        "-o",
        help="Optional path of the generated file",
    ),
    output_format: str = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output file format ({SUPPORTED_OUTPUT_FORMATS_TEXT}), defaults to the output extension",
    ),
    frames: int = typer.Option(
        DEFAULT_FRAMES,
        "--frames",
        envvar=ENV_FRAMES,
        help="Number of animation frames",
    ),
    width: int = typer.Option(
        DEFAULT_WIDTH,
        "--width",
        envvar=ENV_WIDTH,
        help="Width of the generated image in pixels",
    ),
    fps: int = typer.Option(
        DEFAULT_FPS,
        "--fps",
        help="Frames per second for animated outputs",
    ),
    colors: str = typer.Option(
        DEFAULT_COLORS,
        "--colors",
        envvar=ENV_COLORS,
        help="CSS linear-colors inspired color scheme, eg red,yellow@10%,green@20%,blue",
    ),
    sports: list[str] = typer.Option(
        None,
        "--sport",
        help="Sports to include, can be specified multiple times, eg running, cycling",
    ),
    after: str = typer.Option(None, "--after", help="Date from which activities should be included"),
    before: str = typer.Option(None, "--before", help="Date prior to which activities should be included"),
    min_duration: str = typer.Option(None, "--min-duration", help="Shortest duration of included activities, eg 15m"),
    max_duration: str = typer.Option(None, "--max-duration", help="Longest duration of included activities, eg 1h"),
    min_distance: str = typer.Option(None, "--min-distance", help="Shortest distance of included activities, eg 2km"),
    max_distance: str = typer.Option(None, "--max-distance", help="Greatest distance of included activities, eg 10mi"),
    starts_near: str = typer.Option(None, "--starts-near", help="Region activities must start from, eg 51.53,-0.21,1km"),
    ends_near: str = typer.Option(None, "--ends-near", help="Region activities must end in, eg 30.06,31.22,1km"),
    passes_through: str = typer.Option(
        None, "--passes-through", help="Region activities must pass through, eg 40.69,-74.12,10mi"
    ),
    bounded_by: str = typer.Option(
        None, "--bounded-by", help="Region activities must be fully contained within, eg -37.8,144.9,10km"
    ),
) -> None:
    """
    Animate GPS activity files as fading comet trails.

    Supports FIT, GPX, TCX and JSON activity files, directories and zip archives.

    Examples:
      # Every activity under ./tracks as a GIF
      rainbow-roads tracks -o tracks.gif

      # Only runs longer than 5km, as an animated PNG
      rainbow-roads export.zip --sport running --min-distance 5km -f png
    """
    try:
        if frames <= 0:
            raise CLIError("--frames must be positive")
        if width <= 0:
            raise CLIError("--width must be positive")
        if fps <= 0:
            raise CLIError("--fps must be positive")

        output_path = resolve_output_path(output, output_format)
        palette = _build_palette(colors)
        activity_filter = _build_filter(
            sports=sports,
            after=after,
            before=before,
            min_duration=min_duration,
            max_duration=max_duration,
            min_distance=min_distance,
            max_distance=max_distance,
            starts_near=starts_near,
            ends_near=ends_near,
            passes_through=passes_through,
            bounded_by=bounded_by,
        )

        activities = _load_activities(inputs or [], activity_filter)
        _generate_output(activities, output_path, palette, width, frames, fps)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def resolve_output_path(output: str, output_format: str | None) -> Path:
    """
    Decide the output file and its format.

    A directory gets the default file name, the format falls back to the
    output extension and then to GIF, and a mismatching extension gets the
    format's extension appended.
    """
    supported = supported_output_formats()
    path = Path(output)
    if path.is_dir():
        path = path / DEFAULT_OUTPUT

    ext = path.suffix[1:].lower()
    if output_format:
        fmt = output_format.lower()
        if fmt not in supported:
            raise CLIError(f"Invalid format '{output_format}'. Choose from: {SUPPORTED_OUTPUT_FORMATS_TEXT}")
    elif ext in supported:
        fmt = ext
    else:
        fmt = DEFAULT_FORMAT

    if ext != fmt:
        path = path.with_name(path.name + extension_for_output_format(fmt))
    return path


def _build_palette(colors: str) -> Palette:
    try:
        return build_palette(colors)
    except PaletteError as e:
        raise CLIError(f"Invalid --colors: {e}") from e


def _build_filter(
    *,
    sports: list[str] | None,
    after: str | None,
    before: str | None,
    min_duration: str | None,
    max_duration: str | None,
    min_distance: str | None,
    max_distance: str | None,
    starts_near: str | None,
    ends_near: str | None,
    passes_through: str | None,
    bounded_by: str | None,
) -> ActivityFilter:
    """Translate filter options into an ActivityFilter."""
    try:
        return ActivityFilter(
            sports=tuple(sports or ()),
            after=parse_date(after) if after else None,
            before=parse_date(before) if before else None,
            min_duration=parse_duration(min_duration) if min_duration else None,
            max_duration=parse_duration(max_duration) if max_duration else None,
            min_distance=parse_distance(min_distance) if min_distance else None,
            max_distance=parse_distance(max_distance) if max_distance else None,
            starts_near=Region.parse(starts_near) if starts_near else None,
            ends_near=Region.parse(ends_near) if ends_near else None,
            passes_through=Region.parse(passes_through) if passes_through else None,
            bounded_by=Region.parse(bounded_by) if bounded_by else None,
        )
    except ValueError as e:
        raise CLIError(str(e)) from e


def _load_activities(inputs: list[str], activity_filter: ActivityFilter) -> list[Activity]:
    """Scan, parse and filter activities, reporting progress on the console."""
    printer = ActivityConsolePrinter(console)
    try:
        files = scan_inputs(inputs)
    except InputPathError as e:
        raise CLIError(str(e)) from e
    printer.display_file_count(len(files))

    result = load_activities(track(files, description="Parsing...", console=console))
    printer.display_warnings(result.warnings)

    activities = activity_filter.apply(result.activities)
    if not activities:
        raise CLIError("No matching activities found")
    printer.display_stats(activities)
    return activities


def _generate_output(
    activities: list[Activity],
    output_path: Path,
    palette: Palette,
    width: int,
    frames: int,
    fps: int,
) -> None:
    """Render, encode and save the animation."""
    ext = output_path.suffix[1:].upper()
    provider = resolve_output_provider(str(output_path))
    console.print(f"\n[bold blue]Generating {ext} animation...[/bold blue]")
    try:
        encoded = encode_animation(
            activities,
            str(output_path),
            width=width,
            frames=frames,
            fps=fps,
            palette=palette,
            provider=provider,
        )
    except RenderError as e:
        raise CLIError(f"Failed to render animation: {e}") from e

    console.print(f"[bold blue]Saving to {output_path}...[/bold blue]")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        provider.write(encoded)
    except OSError as e:
        raise CLIError(f"Failed to save file '{output_path}': {e}") from e
    console.print(f"[green]✓[/green] {ext} saved to {output_path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
