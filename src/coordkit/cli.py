"""
coordkit CLI entrypoint.

Quick access to the geometry functions from a shell. Points are given as
`LAT,LNG`; polygons and point collections as a JSON file (or `-` for stdin)
holding a list of objects with `lat` and `lng`. Write negative latitudes with `=`
(`--from=-33.8688,151.2093`) so argparse does not read them as options.

Run:
    coordkit distance --from 40.7128,-74.0060 --to 34.0522,-118.2437 --unit miles
    coordkit within --from 40.7128,-74.0060 --points places.json --max-distance 50
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from coordkit.config.settings import get_settings
from coordkit.core.logging import configure_logging
from coordkit.domain.errors import InvalidArgument
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


def _parse_point(value: str) -> dict[str, float]:
    """Parse `LAT,LNG` into a coordinate mapping."""
    parts = value.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Invalid point '{value}', expected LAT,LNG")
    try:
        return {"lat": float(parts[0]), "lng": float(parts[1])}
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid point '{value}', expected LAT,LNG") from e


def _load_points(source: str) -> Any:
    """Load a JSON list of coordinates from a path, or stdin for `-`."""
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _distance_unit(args: argparse.Namespace) -> DistanceUnit:
    return validate_unit(args.unit, DistanceUnit, get_settings().units.distance)


def _emit(args: argparse.Namespace, payload: dict[str, Any], line: str) -> None:
    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(line)


def _describe(record: dict[str, Any] | None, unit: DistanceUnit) -> str:
    if record is None:
        return "No coordinates given."
    name = record.get("name")
    where = f"{record['lat']},{record['lng']}"
    label = f"{name} ({where})" if name else where
    return f"{label}: {record['distance']:.3f} {unit.value}"


def _cmd_distance(args: argparse.Namespace) -> int:
    unit = _distance_unit(args)
    d = calculate_distance(args.from_point, args.to_point, unit)
    _emit(args, {"distance": d, "unit": unit.value}, f"{d:.3f} {unit.value}")
    return 0


def _cmd_area(args: argparse.Namespace) -> int:
    unit = validate_unit(args.unit, AreaUnit, get_settings().units.area)
    area = calculate_geofence_area(_load_points(args.polygon), unit)
    _emit(args, {"area": area, "unit": unit.value}, f"{area:.6f} {unit.value}")
    return 0


def _cmd_contains(args: argparse.Namespace) -> int:
    inside = is_coordinate_in_geofence(args.point, _load_points(args.polygon))
    _emit(args, {"inside": inside}, "inside" if inside else "outside")
    return 0


def _cmd_near(args: argparse.Namespace) -> int:
    unit = _distance_unit(args)
    res = is_coordinate_near_geofence(args.point, _load_points(args.polygon), args.max_distance, unit)
    payload = {
        "is_near": res.is_near,
        "distance": res.distance,
        "closest_point": {"lat": res.closest_point.lat, "lng": res.closest_point.lng},
        "unit": unit.value,
    }
    state = "near" if res.is_near else "not near"
    line = (
        f"{state}: {res.distance:.3f} {unit.value} to boundary at "
        f"{res.closest_point.lat:.6f},{res.closest_point.lng:.6f}"
    )
    _emit(args, payload, line)
    return 0


def _cmd_within(args: argparse.Namespace) -> int:
    unit = _distance_unit(args)
    results = get_coordinates_within_distance(args.from_point, _load_points(args.points), args.max_distance, unit)
    if args.json:
        print(json.dumps({"results": results, "unit": unit.value}, ensure_ascii=False, indent=2))
        return 0
    print(f"{len(results)} within {args.max_distance:g} {unit.value}")
    for i, r in enumerate(results, start=1):
        print(f"{i:>3}. {_describe(r, unit)}")
    return 0


def _cmd_closest(args: argparse.Namespace) -> int:
    unit = _distance_unit(args)
    result = get_closest_coordinate(args.from_point, _load_points(args.points), unit)
    _emit(args, {"result": result, "unit": unit.value}, _describe(result, unit))
    return 0


def _cmd_furthest(args: argparse.Namespace) -> int:
    unit = _distance_unit(args)
    result = get_furthest_coordinate(args.from_point, _load_points(args.points), unit)
    _emit(args, {"result": result, "unit": unit.value}, _describe(result, unit))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the coordkit CLI."""
    parser = argparse.ArgumentParser(prog="coordkit")
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    dist = sub.add_parser("distance", parents=[common], help="Great-circle distance between two points.")
    dist.add_argument("--from", dest="from_point", required=True, type=_parse_point, metavar="LAT,LNG")
    dist.add_argument("--to", dest="to_point", required=True, type=_parse_point, metavar="LAT,LNG")
    dist.add_argument("--unit", default=None, help="km | miles | meters (default from settings)")
    dist.set_defaults(func=_cmd_distance)

    area = sub.add_parser("area", parents=[common], help="Area enclosed by a polygon.")
    area.add_argument("--polygon", required=True, help="JSON file with a list of vertices, or - for stdin")
    area.add_argument("--unit", default=None, help="km2 | miles2 | meters2 (default from settings)")
    area.set_defaults(func=_cmd_area)

    contains = sub.add_parser("contains", parents=[common], help="Is a point inside a polygon?")
    contains.add_argument("--point", required=True, type=_parse_point, metavar="LAT,LNG")
    contains.add_argument("--polygon", required=True, help="JSON file with a list of vertices, or - for stdin")
    contains.set_defaults(func=_cmd_contains)

    near = sub.add_parser("near", parents=[common], help="Distance from a point to a polygon boundary.")
    near.add_argument("--point", required=True, type=_parse_point, metavar="LAT,LNG")
    near.add_argument("--polygon", required=True, help="JSON file with a list of vertices, or - for stdin")
    near.add_argument("--max-distance", required=True, type=float)
    near.add_argument("--unit", default=None, help="km | miles | meters (default from settings)")
    near.set_defaults(func=_cmd_near)

    for name, func, help_text in [
        ("within", _cmd_within, "Points within a radius, closest first."),
        ("closest", _cmd_closest, "Closest point of a collection."),
        ("furthest", _cmd_furthest, "Furthest point of a collection."),
    ]:
        p = sub.add_parser(name, parents=[common], help=help_text)
        p.add_argument("--from", dest="from_point", required=True, type=_parse_point, metavar="LAT,LNG")
        p.add_argument("--points", required=True, help="JSON file with a list of points, or - for stdin")
        if name == "within":
            p.add_argument("--max-distance", required=True, type=float)
        p.add_argument("--unit", default=None, help="km | miles | meters (default from settings)")
        p.set_defaults(func=func)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m coordkit.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except InvalidArgument as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2
    except (OSError, json.JSONDecodeError) as e:
        print(f"error: cannot read coordinates: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
