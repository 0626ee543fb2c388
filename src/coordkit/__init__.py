"""
coordkit: geospatial helpers for coordinates and geofences.

Distances use the Haversine formula on a sphere (R = 6371 km); polygon areas use a
spherical-excess approximation; containment is a planar ray cast. All functions are
pure and accept coordinates as mappings or objects with `lat`/`lng`.
"""

from coordkit.core.geo import GeoPoint
from coordkit.domain.errors import (
    CoordinateOutOfRange,
    InvalidArgument,
    InvalidCoordinate,
    InvalidDistance,
    MalformedUnit,
    NotASequence,
    TooFewVertices,
    UnsupportedUnit,
)
from coordkit.domain.units import AreaUnit, DistanceUnit
from coordkit.geometry.area import calculate_geofence_area
from coordkit.geometry.distance import calculate_distance
from coordkit.geometry.geofence import GeofenceProximity, is_coordinate_in_geofence, is_coordinate_near_geofence
from coordkit.geometry.nearby import get_closest_coordinate, get_coordinates_within_distance, get_furthest_coordinate

__version__ = "0.1.0"

__all__ = [
    "AreaUnit",
    "CoordinateOutOfRange",
    "DistanceUnit",
    "GeoPoint",
    "GeofenceProximity",
    "InvalidArgument",
    "InvalidCoordinate",
    "InvalidDistance",
    "MalformedUnit",
    "NotASequence",
    "TooFewVertices",
    "UnsupportedUnit",
    "__version__",
    "calculate_distance",
    "calculate_geofence_area",
    "get_closest_coordinate",
    "get_coordinates_within_distance",
    "get_furthest_coordinate",
    "is_coordinate_in_geofence",
    "is_coordinate_near_geofence",
]
