"""Geographic helpers shared by loaders, filters and the projector."""

import math
import re
from dataclasses import dataclass

from ..constants import EARTH_RADIUS, MEAN_EARTH_RADIUS


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude/longitude pair in degrees."""
    lat: float
    lon: float


def mercator_meters(lat: float, lon: float) -> tuple[float, float]:
    """Project a point to spherical web-Mercator metres."""
    x = EARTH_RADIUS * math.radians(lon)
    y = EARTH_RADIUS * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
    return x, y


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two points given in degrees."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * MEAN_EARTH_RADIUS * math.asin(min(1.0, math.sqrt(a)))


_DISTANCE_UNITS = {
    "m": 1.0,
    "km": 1000.0,
    "mi": 1609.344,
    "ft": 0.3048,
}
_DISTANCE_PATTERN = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*([a-z]*)\s*$", re.IGNORECASE)


def parse_distance(text: str) -> float:
    """
    Parse a distance such as ``2km``, ``10mi`` or ``500`` into metres.

    Raises:
        ValueError: If the text is not a number with an optional known unit
    """
    match = _DISTANCE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Invalid distance: {text!r}")
    value, unit = match.groups()
    factor = _DISTANCE_UNITS.get(unit.lower() or "m")
    if factor is None:
        supported = ", ".join(_DISTANCE_UNITS)
        raise ValueError(f"Unknown distance unit {unit!r}. Supported units: {supported}")
    return float(value) * factor


@dataclass(frozen=True, slots=True)
class Region:
    """A circle on the globe, radius in metres."""
    lat: float
    lon: float
    radius: float

    @classmethod
    def parse(cls, text: str) -> "Region":
        """Parse ``lat,lon,radius`` such as ``51.53,-0.21,1km``."""
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 3:
            raise ValueError(f"Invalid region {text!r}, expected lat,lon,radius")
        try:
            lat, lon = float(parts[0]), float(parts[1])
        except ValueError as e:
            raise ValueError(f"Invalid region coordinates in {text!r}") from e
        if not -90 <= lat <= 90 or not -180 <= lon <= 180:
            raise ValueError(f"Region centre out of range in {text!r}")
        return cls(lat, lon, parse_distance(parts[2]))

    def contains(self, lat: float, lon: float) -> bool:
        return haversine_distance(self.lat, self.lon, lat, lon) < self.radius

    def __str__(self) -> str:
        if self.radius >= 1000:
            radius = f"{self.radius / 1000:.1f}km"
        else:
            radius = f"{self.radius:.0f}m"
        return f"{self.lat:.4f},{self.lon:.4f},{radius}"
