"""
Collection queries: radius filter, closest and furthest point.

All three are linear scans. Results are new dicts holding every field of the
input record plus a `distance` key; input records are never mutated.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from coordkit.core.geo import GeoPoint, haversine_km
from coordkit.domain.units import DistanceUnit
from coordkit.geometry.validation import (
    ensure_sequence,
    validate_coordinate,
    validate_max_distance,
    validate_unit,
)

logger = logging.getLogger(__name__)


def _slot_names(coord: Any) -> list[str]:
    names: list[str] = []
    for cls in type(coord).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__") and s not in names)
    return names


def record_fields(coord: Any) -> dict[str, Any]:
    """Return a shallow copy of the fields of a coordinate record."""
    if isinstance(coord, Mapping):
        return dict(coord)
    if isinstance(coord, BaseModel):
        return coord.model_dump()
    if dataclasses.is_dataclass(coord) and not isinstance(coord, type):
        return dataclasses.asdict(coord)
    if isinstance(coord, tuple) and hasattr(coord, "_asdict"):
        return dict(coord._asdict())

    fields = {name: getattr(coord, name) for name in _slot_names(coord) if hasattr(coord, name)}
    fields.update(getattr(coord, "__dict__", {}))
    if "lat" in fields and "lng" in fields:
        return fields
    return {**fields, "lat": coord.lat, "lng": coord.lng}


def annotate(coord: Any, distance: float) -> dict[str, Any]:
    """Copy `coord` into a dict and add its `distance`."""
    return {**record_fields(coord), "distance": distance}


def _scan(origin: GeoPoint, coordinates: Any, unit: DistanceUnit):
    # Validates each element right before measuring it, so the first bad record aborts the scan.
    for i, coord in enumerate(coordinates):
        point = validate_coordinate(coord, f"coordinates[{i}]")
        yield coord, unit.from_km(haversine_km(origin, point))


def get_coordinates_within_distance(
    from_coord: Any,
    coordinates: Any,
    max_distance: float,
    unit: DistanceUnit | str | None = DistanceUnit.KM,
) -> list[dict[str, Any]]:
    """Return the coordinates within `max_distance` of `from_coord`, closest first.

    Args:
        from_coord: Reference coordinate.
        coordinates: Sequence of coordinate records; extra fields are preserved.
        max_distance: Inclusive radius, in `unit`.
        unit: "km" (default), "miles" or "meters".

    Returns:
        Annotated copies sorted by ascending distance (stable on ties); an empty
        list when nothing qualifies.
    """
    origin = validate_coordinate(from_coord, "from_coord")
    ensure_sequence(coordinates, "coordinates")
    radius = validate_max_distance(max_distance)
    parsed = validate_unit(unit, DistanceUnit, DistanceUnit.KM)

    # Validate everything before building any output.
    measured = list(_scan(origin, coordinates, parsed))
    results = [annotate(coord, d) for coord, d in measured if d <= radius]
    results.sort(key=lambda r: r["distance"])

    logger.debug("%d of %d coordinates within %s %s", len(results), len(measured), radius, parsed.value)
    return results


def get_closest_coordinate(
    from_coord: Any,
    coordinates: Any,
    unit: DistanceUnit | str | None = DistanceUnit.KM,
) -> dict[str, Any] | None:
    """Return the coordinate closest to `from_coord`, or None for an empty input.

    The first record wins ties.
    """
    origin = validate_coordinate(from_coord, "from_coord")
    ensure_sequence(coordinates, "coordinates")
    if len(coordinates) == 0:
        return None
    parsed = validate_unit(unit, DistanceUnit, DistanceUnit.KM)

    best: Any = None
    best_distance = float("inf")
    for coord, d in _scan(origin, coordinates, parsed):
        if d < best_distance:
            best, best_distance = coord, d
    return annotate(best, best_distance)


def get_furthest_coordinate(
    from_coord: Any,
    coordinates: Any,
    unit: DistanceUnit | str | None = DistanceUnit.KM,
) -> dict[str, Any] | None:
    """Return the coordinate furthest from `from_coord`, or None for an empty input.

    The first record wins ties.
    """
    origin = validate_coordinate(from_coord, "from_coord")
    ensure_sequence(coordinates, "coordinates")
    if len(coordinates) == 0:
        return None
    parsed = validate_unit(unit, DistanceUnit, DistanceUnit.KM)

    best: Any = None
    best_distance = -1.0
    for coord, d in _scan(origin, coordinates, parsed):
        if d > best_distance:
            best, best_distance = coord, d
    return annotate(best, best_distance)
