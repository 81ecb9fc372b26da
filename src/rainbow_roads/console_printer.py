"""Console summary of the activities selected for rendering."""

from datetime import timedelta
from typing import Sequence

from rich.console import Console
from rich.table import Table

from .render.render_context import GeoBounds
from .tracks.activity import Activity
from .tracks.geo import Region, haversine_distance

_PERIODS: tuple[tuple[str, timedelta], ...] = (
    ("year", timedelta(days=365.25)),
    ("month", timedelta(days=365.25 / 12)),
    ("week", timedelta(weeks=1)),
    ("day", timedelta(days=1)),
    ("hour", timedelta(hours=1)),
    ("minute", timedelta(minutes=1)),
)


def period_parts(span: timedelta) -> tuple[float, str]:
    """Express a time span in the largest unit it fills at least once."""
    for name, unit in _PERIODS:
        if span >= unit:
            return span / unit, name
    return span.total_seconds(), "second"


def format_duration(span: timedelta) -> str:
    total = int(span.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes:02d}m{seconds:02d}s"
    if minutes:
        return f"{minutes}m{seconds:02d}s"
    return f"{seconds}s"


def bounding_region(activities: Sequence[Activity]) -> Region:
    """Circle centred on the lat/lon bounds that covers every point."""
    points = [tp for act in activities for tp in act.points]
    bounds = GeoBounds(
        min(tp.lat for tp in points),
        min(tp.lon for tp in points),
        max(tp.lat for tp in points),
        max(tp.lon for tp in points),
    )
    lat, lon = bounds.center
    radius = max(haversine_distance(lat, lon, tp.lat, tp.lon) for tp in points)
    return Region(lat, lon, radius)


class ActivityConsolePrinter:
    """Prints activity statistics with rich."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def display_file_count(self, count: int) -> None:
        self.console.print(f"[bold]activity files:[/bold] {count:,}")

    def display_warnings(self, warnings: Sequence[str]) -> None:
        for warning in warnings:
            self.console.print(f"[yellow]WARN:[/yellow] {warning}", highlight=False)

    def display_stats(self, activities: Sequence[Activity]) -> None:
        """Print counts, ranges and totals for the selected activities."""
        if not activities:
            return
        dates = [act.date for act in activities]
        durations = [act.duration for act in activities]
        distances = [act.distance for act in activities]
        first, last = min(dates), max(dates)
        amount, unit = period_parts(last - first)

        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column(style="bold")
        table.add_column()
        table.add_row("activities", f"{len(activities):,}")
        table.add_row(
            "period",
            f"{amount:.1f} {unit}(s) ({first:%Y-%m-%d} to {last:%Y-%m-%d})",
        )
        table.add_row(
            "duration range",
            f"{format_duration(min(durations))} to {format_duration(max(durations))}",
        )
        table.add_row(
            "distance range",
            f"{min(distances) / 1000:.1f}km to {max(distances) / 1000:.1f}km",
        )
        table.add_row("bounds", str(bounding_region(activities)))
        table.add_row("total points", f"{sum(len(act) for act in activities):,}")
        table.add_row("total duration", format_duration(sum(durations, timedelta())))
        table.add_row("total distance", f"{sum(distances) / 1000:.1f}km")
        self.console.print(table)
