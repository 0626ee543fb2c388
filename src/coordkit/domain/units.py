"""
Distance and area units.

Units are parsed once at the boundary (see `coordkit.geometry.validation.validate_unit`)
and carried as enum members afterwards. Each member knows its factor from the
base unit (kilometers / square kilometers).
"""

from __future__ import annotations

from enum import Enum


class DistanceUnit(str, Enum):
    KM = "km"
    MILES = "miles"
    METERS = "meters"

    @property
    def factor(self) -> float:
        """Multiplier converting kilometers into this unit."""
        return _DISTANCE_FACTORS[self]

    def from_km(self, km: float) -> float:
        return km * self.factor


class AreaUnit(str, Enum):
    KM2 = "km2"
    MILES2 = "miles2"
    METERS2 = "meters2"

    @property
    def factor(self) -> float:
        """Multiplier converting square kilometers into this unit."""
        return _AREA_FACTORS[self]

    def from_km2(self, km2: float) -> float:
        return km2 * self.factor


_DISTANCE_FACTORS: dict[DistanceUnit, float] = {
    DistanceUnit.KM: 1.0,
    DistanceUnit.MILES: 0.621371,
    DistanceUnit.METERS: 1000.0,
}

_AREA_FACTORS: dict[AreaUnit, float] = {
    AreaUnit.KM2: 1.0,
    AreaUnit.MILES2: 0.386102,
    AreaUnit.METERS2: 1_000_000.0,
}
