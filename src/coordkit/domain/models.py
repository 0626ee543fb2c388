"""
API models (Pydantic).

These types are the JSON contract of the HTTP API. Coordinates are kept as
free-form values on the way in: the geometry functions do the validation, so API
clients get the same index-qualified error messages as library callers, and extra
fields (names, ids, ...) pass through to the results.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from coordkit.domain.units import AreaUnit, DistanceUnit


class GeoPointModel(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class DistanceRequest(BaseModel):
    coord1: Any
    coord2: Any
    unit: Any = None


class DistanceResponse(BaseModel):
    distance: float
    unit: DistanceUnit


class AreaRequest(BaseModel):
    coordinates: Any = Field(..., description="Polygon vertices, at least 3.")
    unit: Any = None


class AreaResponse(BaseModel):
    area: float
    unit: AreaUnit


class ContainsRequest(BaseModel):
    coord: Any
    geofence: Any


class ContainsResponse(BaseModel):
    inside: bool


class NearRequest(BaseModel):
    coord: Any
    geofence: Any
    max_distance: Any
    unit: Any = None


class NearResponse(BaseModel):
    is_near: bool
    distance: float
    closest_point: GeoPointModel
    unit: DistanceUnit


class WithinRequest(BaseModel):
    from_coord: Any
    coordinates: Any
    max_distance: Any
    unit: Any = None


class RankRequest(BaseModel):
    """Request body for the closest/furthest queries."""

    from_coord: Any
    coordinates: Any
    unit: Any = None


class WithinResponse(BaseModel):
    results: list[dict[str, Any]]
    unit: DistanceUnit


class RankResponse(BaseModel):
    result: dict[str, Any] | None
    unit: DistanceUnit
