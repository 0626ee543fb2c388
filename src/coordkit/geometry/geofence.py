"""
Geofence tests: containment and proximity to the boundary.

Both tests treat the vertex list as a closed ring; a duplicated closing vertex is
harmless.

Known limit: containment is a planar ray cast on raw lat/lng values. It is
accurate for city-scale geofences but not near the poles or for polygons that
cross the antimeridian.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from coordkit.core.geo import GeoPoint, closest_point_on_segment, haversine_km
from coordkit.domain.units import DistanceUnit
from coordkit.geometry.validation import (
    ensure_sequence,
    validate_coordinate,
    validate_coordinates,
    validate_max_distance,
    validate_unit,
)

logger = logging.getLogger(__name__)

MIN_GEOFENCE_VERTICES = 3


@dataclass(frozen=True)
class GeofenceProximity:
    """Result of `is_coordinate_near_geofence`.

    Attributes:
        is_near: True when `distance <= max_distance`.
        distance: Distance to the nearest boundary point, in the requested unit.
        closest_point: The nearest point on the geofence boundary.
    """

    is_near: bool
    distance: float
    closest_point: GeoPoint


def _validate_geofence(geofence: Any) -> list[GeoPoint]:
    ensure_sequence(geofence, "geofence", message="geofence must be a sequence of coordinates")
    return validate_coordinates(
        geofence,
        "geofence",
        minimum=MIN_GEOFENCE_VERTICES,
        too_few_message=f"At least {MIN_GEOFENCE_VERTICES} coordinates are required to form a geofence polygon",
    )


def is_coordinate_in_geofence(coord: Any, geofence: Any) -> bool:
    """Check whether `coord` lies inside the `geofence` polygon.

    Casts a ray from the point towards increasing longitude and counts edge
    crossings; an odd count means inside. Points exactly on an edge may land on
    either side.
    """
    point = validate_coordinate(coord, "coord")
    ring = _validate_geofence(geofence)

    lat = point.lat
    lng = point.lng
    inside = False

    j = len(ring) - 1
    for i in range(len(ring)):
        lat1, lng1 = ring[i].lat, ring[i].lng
        lat2, lng2 = ring[j].lat, ring[j].lng
        if (lat1 > lat) != (lat2 > lat) and lng < (lng2 - lng1) * (lat - lat1) / (lat2 - lat1) + lng1:
            inside = not inside
        j = i

    return inside


def is_coordinate_near_geofence(
    coord: Any,
    geofence: Any,
    max_distance: float,
    unit: DistanceUnit | str | None = DistanceUnit.KM,
) -> GeofenceProximity:
    """Check whether `coord` is within `max_distance` of the geofence boundary.

    For each edge, the closest point is found in a local equirectangular
    projection around `coord`, then measured with the Haversine formula. The
    minimum over all edges wins (first edge on ties).

    Note that this measures distance to the boundary only: a point deep inside
    a large geofence is not "near" it. Combine with `is_coordinate_in_geofence`
    when inside points should count too.
    """
    point = validate_coordinate(coord, "coord")
    ring = _validate_geofence(geofence)
    threshold = validate_max_distance(max_distance)
    parsed = validate_unit(unit, DistanceUnit, DistanceUnit.KM)

    best_km = float("inf")
    best_point = ring[0]
    j = len(ring) - 1
    for i in range(len(ring)):
        candidate = closest_point_on_segment(point, ring[j], ring[i])
        d = haversine_km(point, candidate)
        if d < best_km:
            best_km = d
            best_point = candidate
        j = i

    distance = parsed.from_km(best_km)
    logger.debug("Nearest geofence edge point %s at %.6f %s", best_point, distance, parsed.value)
    return GeofenceProximity(is_near=distance <= threshold, distance=distance, closest_point=best_point)
