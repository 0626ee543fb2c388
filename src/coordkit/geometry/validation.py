"""
Input validation for the geometry operations.

Coordinates are duck-typed: a mapping with `lat`/`lng` keys (e.g. parsed JSON) or
any object with `lat`/`lng` attributes (e.g. `GeoPoint`, a dataclass, a pydantic
model). Validation returns plain `GeoPoint`s so the math never touches caller
objects again.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any, TypeVar

from coordkit.core.geo import GeoPoint
from coordkit.domain.errors import (
    CoordinateOutOfRange,
    InvalidCoordinate,
    InvalidDistance,
    MalformedUnit,
    NotASequence,
    TooFewVertices,
    UnsupportedUnit,
)

U = TypeVar("U", bound=str)

LAT_RANGE = (-90.0, 90.0)
LNG_RANGE = (-180.0, 180.0)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _read_lat_lng(coord: Any) -> tuple[Any, Any] | None:
    if isinstance(coord, Mapping):
        if "lat" in coord and "lng" in coord:
            return coord["lat"], coord["lng"]
        return None
    if coord is None or isinstance(coord, (str, bytes)):
        return None
    if hasattr(coord, "lat") and hasattr(coord, "lng"):
        return coord.lat, coord.lng
    return None


def validate_coordinate(coord: Any, label: str = "coordinate") -> GeoPoint:
    """Validate a coordinate and return its lat/lng as a `GeoPoint`.

    Raises:
        InvalidCoordinate: `coord` has no `lat`/`lng` or they are not numbers.
        CoordinateOutOfRange: latitude outside [-90, 90] or longitude outside
            [-180, 180]. NaN and infinities are out of range.
    """
    pair = _read_lat_lng(coord)
    if pair is None:
        raise InvalidCoordinate(label)

    lat, lng = pair
    if not _is_number(lat) or not _is_number(lng):
        raise InvalidCoordinate(label, numeric=True)

    # Compared before float() so huge ints fail the range check instead of overflowing.
    lo, hi = LAT_RANGE
    if not lo <= lat <= hi:
        raise CoordinateOutOfRange(label, field="lat", value=lat, minimum=lo, maximum=hi)
    lo, hi = LNG_RANGE
    if not lo <= lng <= hi:
        raise CoordinateOutOfRange(label, field="lng", value=lng, minimum=lo, maximum=hi)

    return GeoPoint(lat=float(lat), lng=float(lng))


def validate_unit(unit: Any, unit_type: type[U], default: U) -> U:
    """Parse `unit` into a member of the `unit_type` enum.

    `None` or an empty string yields `default`. Matching is case-insensitive.
    """
    if unit is None or unit == "":
        return default
    if not isinstance(unit, str):
        raise MalformedUnit(unit)

    allowed = [member.value for member in unit_type]  # type: ignore[attr-defined]
    normalized = unit.lower()
    if normalized not in allowed:
        raise UnsupportedUnit(getattr(unit, "value", unit), allowed)
    return unit_type(normalized)  # type: ignore[call-arg]


def ensure_sequence(value: Any, argument: str, *, message: str | None = None) -> Sequence[Any]:
    """Reject anything that is not a list/tuple-like sequence of records."""
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise NotASequence(argument, message)
    return value


def validate_coordinates(
    coordinates: Sequence[Any],
    argument: str,
    *,
    minimum: int = 0,
    too_few_message: str | None = None,
) -> list[GeoPoint]:
    """Validate every element, labelling failures as `<argument>[<index>]`.

    The caller is expected to have run `ensure_sequence` first.
    """
    if len(coordinates) < minimum:
        raise TooFewVertices(argument, count=len(coordinates), required=minimum, message=too_few_message)
    return [validate_coordinate(c, f"{argument}[{i}]") for i, c in enumerate(coordinates)]


def validate_max_distance(value: Any, argument: str = "max_distance") -> float:
    """Validate a distance threshold: a real, non-negative number (infinity allowed)."""
    if not _is_number(value) or value < 0:
        raise InvalidDistance(argument, value)
    try:
        threshold = float(value)
    except OverflowError:
        return math.inf
    if math.isnan(threshold):
        raise InvalidDistance(argument, value)
    return threshold
