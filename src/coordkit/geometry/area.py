"""
Polygon area on the sphere.

The area is a line-integral approximation of the spherical excess: for every
edge, `Δλ · (2 + sin φ1 + sin φ2)`, summed, then `|Σ| · R² / 2`.
It is accurate for small to moderate polygons and ignores winding order.
"""

from __future__ import annotations

import logging
from math import radians, sin
from typing import Any

from coordkit.core.geo import EARTH_RADIUS_KM, GeoPoint
from coordkit.domain.units import AreaUnit
from coordkit.geometry.validation import ensure_sequence, validate_coordinates, validate_unit

logger = logging.getLogger(__name__)

MIN_POLYGON_VERTICES = 3


def close_ring(points: list[GeoPoint]) -> list[GeoPoint]:
    """Return `points` with the first vertex appended when the ring is open."""
    if points[0] != points[-1]:
        return [*points, points[0]]
    return list(points)


def calculate_geofence_area(coordinates: Any, unit: AreaUnit | str | None = AreaUnit.KM2) -> float:
    """Calculate the area enclosed by a polygon of coordinates.

    The polygon may be open or already closed (last vertex equal to the first);
    both give the same result.

    Args:
        coordinates: Sequence of at least 3 coordinates.
        unit: "km2" (default), "miles2" or "meters2"; case-insensitive.

    Raises:
        InvalidArgument: not a sequence, fewer than 3 vertices, an invalid
            vertex (`coordinates[i]`), or an unsupported unit.
    """
    ensure_sequence(coordinates, "coordinates")
    points = validate_coordinates(coordinates, "coordinates", minimum=MIN_POLYGON_VERTICES)
    parsed = validate_unit(unit, AreaUnit, AreaUnit.KM2)

    ring = close_ring(points)
    n = len(ring) - 1

    total = 0.0
    for i in range(n):
        p1 = ring[i]
        p2 = ring[(i + 1) % n]
        total += radians(p2.lng - p1.lng) * (2 + sin(radians(p1.lat)) + sin(radians(p2.lat)))

    area_km2 = abs(total) * EARTH_RADIUS_KM * EARTH_RADIUS_KM / 2
    logger.debug("Polygon with %d vertices: %.6f km2", n, area_km2)
    return parsed.from_km2(area_km2)
