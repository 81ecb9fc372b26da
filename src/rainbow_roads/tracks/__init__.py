"""Activity model, track file loading and selection."""

from .activity import Activity, TrackPoint, as_utc
from .filters import ActivityFilter, parse_date, parse_duration
from .fit_tracks import parse_fit
from .geo import GeoPoint, Region, haversine_distance, mercator_meters, parse_distance
from .gpx_tracks import parse_gpx
from .parsing import TrackParseError, parse_timestamp
from .raw import parse_raw
from .scanner import InputPathError, LoadResult, TrackFile, load_activities, scan_inputs
from .tcx_tracks import parse_tcx

__all__ = [
    "Activity",
    "ActivityFilter",
    "GeoPoint",
    "InputPathError",
    "LoadResult",
    "Region",
    "TrackFile",
    "TrackParseError",
    "TrackPoint",
    "as_utc",
    "haversine_distance",
    "load_activities",
    "mercator_meters",
    "parse_date",
    "parse_distance",
    "parse_duration",
    "parse_fit",
    "parse_gpx",
    "parse_raw",
    "parse_tcx",
    "parse_timestamp",
    "scan_inputs",
]
