"""
API routes.

Endpoints:
- POST `/api/distance`: distance between two coordinates.
- POST `/api/area`: polygon area.
- POST `/api/geofence/contains`: point-in-polygon test.
- POST `/api/geofence/near`: distance to the geofence boundary.
- POST `/api/nearby/within`, `/api/nearby/closest`, `/api/nearby/furthest`: collection queries.
- GET  `/api/units`: supported units and configured defaults.
- GET  `/api/health`: liveness probe.

Invalid input is reported as HTTP 400 with `{"code": ..., "message": ...}`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from fastapi import APIRouter, HTTPException

from coordkit import __version__
from coordkit.config.settings import get_settings
from coordkit.domain.errors import InvalidArgument
from coordkit.domain.models import (
    AreaRequest,
    AreaResponse,
    ContainsRequest,
    ContainsResponse,
    DistanceRequest,
    DistanceResponse,
    GeoPointModel,
    NearRequest,
    NearResponse,
    RankRequest,
    RankResponse,
    WithinRequest,
    WithinResponse,
)
from coordkit.domain.units import AreaUnit, DistanceUnit
from coordkit.geometry.area import calculate_geofence_area
from coordkit.geometry.distance import calculate_distance
from coordkit.geometry.geofence import is_coordinate_in_geofence, is_coordinate_near_geofence
from coordkit.geometry.nearby import (
    get_closest_coordinate,
    get_coordinates_within_distance,
    get_furthest_coordinate,
)
from coordkit.geometry.validation import validate_unit

logger = logging.getLogger(__name__)

router = APIRouter()


@contextmanager
def _invalid_argument_as_400() -> Iterator[None]:
    try:
        yield
    except InvalidArgument as e:
        logger.info("Rejected request: %s", e.message)
        raise HTTPException(status_code=400, detail=e.as_dict()) from e


def _check_size(value: Any, argument: str) -> None:
    limit = get_settings().api.max_coordinates
    if isinstance(value, Sequence) and not isinstance(value, str) and len(value) > limit:
        raise HTTPException(
            status_code=400,
            detail={
                "code": "TOO_MANY_COORDINATES",
                "message": f"{argument} has {len(value)} items; at most {limit} are accepted",
            },
        )


def _distance_unit(raw: Any) -> DistanceUnit:
    default = get_settings().units.distance
    return validate_unit(raw, DistanceUnit, default)


def _area_unit(raw: Any) -> AreaUnit:
    default = get_settings().units.area
    return validate_unit(raw, AreaUnit, default)


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok", "name": get_settings().app.name, "version": __version__}


@router.get("/api/units")
def get_units() -> dict:
    """Return supported units and the configured defaults."""
    settings = get_settings()
    return {
        "distance": [u.value for u in DistanceUnit],
        "area": [u.value for u in AreaUnit],
        "defaults": {"distance": settings.units.distance.value, "area": settings.units.area.value},
    }


@router.post("/api/distance", response_model=DistanceResponse)
def post_distance(req: DistanceRequest) -> DistanceResponse:
    with _invalid_argument_as_400():
        unit = _distance_unit(req.unit)
        distance = calculate_distance(req.coord1, req.coord2, unit)
    return DistanceResponse(distance=distance, unit=unit)


@router.post("/api/area", response_model=AreaResponse)
def post_area(req: AreaRequest) -> AreaResponse:
    _check_size(req.coordinates, "coordinates")
    with _invalid_argument_as_400():
        unit = _area_unit(req.unit)
        area = calculate_geofence_area(req.coordinates, unit)
    return AreaResponse(area=area, unit=unit)


@router.post("/api/geofence/contains", response_model=ContainsResponse)
def post_geofence_contains(req: ContainsRequest) -> ContainsResponse:
    _check_size(req.geofence, "geofence")
    with _invalid_argument_as_400():
        inside = is_coordinate_in_geofence(req.coord, req.geofence)
    return ContainsResponse(inside=inside)


@router.post("/api/geofence/near", response_model=NearResponse)
def post_geofence_near(req: NearRequest) -> NearResponse:
    _check_size(req.geofence, "geofence")
    with _invalid_argument_as_400():
        unit = _distance_unit(req.unit)
        proximity = is_coordinate_near_geofence(req.coord, req.geofence, req.max_distance, unit)
    return NearResponse(
        is_near=proximity.is_near,
        distance=proximity.distance,
        closest_point=GeoPointModel(lat=proximity.closest_point.lat, lng=proximity.closest_point.lng),
        unit=unit,
    )


@router.post("/api/nearby/within", response_model=WithinResponse)
def post_nearby_within(req: WithinRequest) -> WithinResponse:
    _check_size(req.coordinates, "coordinates")
    with _invalid_argument_as_400():
        unit = _distance_unit(req.unit)
        results = get_coordinates_within_distance(req.from_coord, req.coordinates, req.max_distance, unit)
    return WithinResponse(results=results, unit=unit)


@router.post("/api/nearby/closest", response_model=RankResponse)
def post_nearby_closest(req: RankRequest) -> RankResponse:
    _check_size(req.coordinates, "coordinates")
    with _invalid_argument_as_400():
        unit = _distance_unit(req.unit)
        result = get_closest_coordinate(req.from_coord, req.coordinates, unit)
    return RankResponse(result=result, unit=unit)


@router.post("/api/nearby/furthest", response_model=RankResponse)
def post_nearby_furthest(req: RankRequest) -> RankResponse:
    _check_size(req.coordinates, "coordinates")
    with _invalid_argument_as_400():
        unit = _distance_unit(req.unit)
        result = get_furthest_coordinate(req.from_coord, req.coordinates, unit)
    return RankResponse(result=result, unit=unit)
