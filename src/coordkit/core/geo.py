from __future__ import annotations
from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt

"""
Spherical geometry primitives.

Everything here works on a sphere with the mean Earth radius, in kilometers.
Validation and unit handling live in `coordkit.geometry`; these helpers assume
their inputs are already valid.
"""

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in kilometers between two points."""
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlat = radians(b.lat - a.lat)
    dlng = radians(b.lng - a.lng)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def _unwrap_lng(lng: float, *, ref_lng: float) -> float:
    # Shift by whole turns so the result lies within 180 degrees of `ref_lng`.
    while lng - ref_lng > 180.0:
        lng -= 360.0
    while lng - ref_lng < -180.0:
        lng += 360.0
    return lng


def _wrap_lng(lng: float) -> float:
    if lng > 180.0:
        return lng - 360.0
    if lng < -180.0:
        return lng + 360.0
    return lng


def closest_point_on_segment(p: GeoPoint, a: GeoPoint, b: GeoPoint) -> GeoPoint:
    """Return the point of segment `a`-`b` closest to `p`.

    The segment is projected with an equirectangular projection centred on `p`
    (x = lng * cos(lat0), y = lat), which is accurate for geofence-sized
    segments. Segment longitudes are unwrapped around `p` first so edges that
    straddle the antimeridian stay short.
    """
    k = cos(radians(p.lat))
    ax = _unwrap_lng(a.lng, ref_lng=p.lng) * k
    bx = _unwrap_lng(b.lng, ref_lng=p.lng) * k
    px = p.lng * k
    ay, by, py = a.lat, b.lat, p.lat

    dx = bx - ax
    dy = by - ay
    seg_len2 = dx * dx + dy * dy
    if seg_len2 == 0.0:
        return a

    t = ((px - ax) * dx + (py - ay) * dy) / seg_len2
    if t <= 0.0:
        return a
    if t >= 1.0:
        return b

    lat = ay + t * dy
    # At the poles every longitude is the same point.
    lng = p.lng if k == 0.0 else (ax + t * dx) / k
    return GeoPoint(lat=lat, lng=_wrap_lng(lng))
