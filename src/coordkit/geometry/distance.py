"""
Great-circle distance between two coordinates.

Uses the Haversine formula on a sphere of radius 6371 km (see `coordkit.core.geo`).
The spherical model is accurate to roughly 0.5% against the WGS84 ellipsoid, which
is fine for proximity queries and geofencing.
"""

from __future__ import annotations

from typing import Any

from coordkit.core.geo import haversine_km
from coordkit.domain.units import DistanceUnit
from coordkit.geometry.validation import validate_coordinate, validate_unit


def calculate_distance(coord1: Any, coord2: Any, unit: DistanceUnit | str | None = DistanceUnit.KM) -> float:
    """Calculate the distance between two coordinates.

    Args:
        coord1: First coordinate (mapping or object with `lat`/`lng`).
        coord2: Second coordinate.
        unit: "km" (default), "miles" or "meters"; case-insensitive.

    Returns:
        Distance in the requested unit.

    Raises:
        InvalidArgument: a coordinate or the unit is invalid.

    Example:
        >>> round(calculate_distance({"lat": 51.5074, "lng": -0.1278}, {"lat": 48.8566, "lng": 2.3522}), 1)
        343.6
    """
    a = validate_coordinate(coord1, "coord1")
    b = validate_coordinate(coord2, "coord2")
    parsed = validate_unit(unit, DistanceUnit, DistanceUnit.KM)
    return parsed.from_km(haversine_km(a, b))
