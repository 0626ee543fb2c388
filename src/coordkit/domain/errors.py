"""
Error taxonomy.

Every input problem is an `InvalidArgument` (a `ValueError`), so callers that only
care about "bad input" can catch one type. Each subclass keeps the offending
values as attributes plus a stable `code`, and formats its human-readable message
from them, so callers never need to parse message text.
"""

from __future__ import annotations

from typing import Any, Sequence


class InvalidArgument(ValueError):
    """Base class for all rejected inputs."""

    code = "INVALID_ARGUMENT"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def as_dict(self) -> dict[str, Any]:
        """Return the `{code, message}` payload used by the CLI and API."""
        return {"code": self.code, "message": self.message}


class InvalidCoordinate(InvalidArgument):
    """A coordinate is missing `lat`/`lng` or they are not numbers."""

    code = "INVALID_COORDINATE"

    def __init__(self, label: str, *, numeric: bool = False) -> None:
        self.label = label
        if numeric:
            self.reason = "must have numeric lat and lng fields"
        else:
            self.reason = "must be a mapping or object with lat and lng fields"
        super().__init__(f"{label} {self.reason}")


class CoordinateOutOfRange(InvalidArgument):
    code = "OUT_OF_RANGE"

    _FIELD_NAMES = {"lat": "latitude", "lng": "longitude"}

    def __init__(self, label: str, *, field: str, value: float, minimum: float, maximum: float) -> None:
        self.label = label
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        name = self._FIELD_NAMES.get(field, field)
        super().__init__(f"{label} {name} must be between {minimum:g} and {maximum:g} degrees")


class MalformedUnit(InvalidArgument):
    code = "MALFORMED_UNIT"

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__("Unit must be a string")


class UnsupportedUnit(InvalidArgument):
    code = "UNSUPPORTED_UNIT"

    def __init__(self, value: str, allowed: Sequence[str]) -> None:
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(f"Invalid unit: {value}. Valid units are: {', '.join(self.allowed)}")


class NotASequence(InvalidArgument):
    code = "NOT_A_SEQUENCE"

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"{argument} must be a sequence")


class TooFewVertices(InvalidArgument):
    code = "TOO_FEW_VERTICES"

    def __init__(self, argument: str, *, count: int, required: int, message: str | None = None) -> None:
        self.argument = argument
        self.count = count
        self.required = required
        super().__init__(message or f"At least {required} coordinates are required to form a polygon")


class InvalidDistance(InvalidArgument):
    code = "INVALID_DISTANCE"

    def __init__(self, argument: str, value: Any) -> None:
        self.argument = argument
        self.value = value
        super().__init__("Max distance must be a non-negative number")
