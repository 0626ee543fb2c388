from __future__ import annotations

import io
import json

import pytest

from coordkit.cli import main

FENCE = [
    {"lat": 0.0, "lng": 0.0},
    {"lat": 0.0, "lng": 1.0},
    {"lat": 1.0, "lng": 1.0},
    {"lat": 1.0, "lng": 0.0},
]

PLACES = [
    {"lat": 40.7357, "lng": -74.1724, "name": "Newark"},
    {"lat": 40.7614, "lng": -73.9776, "name": "Central Park"},
    {"lat": 34.0522, "lng": -118.2437, "name": "Los Angeles"},
]


@pytest.fixture(autouse=True)
def _keep_root_logger():
    # `main()` configures logging; restore the root logger pytest set up.
    import logging

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fence_file(tmp_path):
    path = tmp_path / "fence.json"
    path.write_text(json.dumps(FENCE), encoding="utf-8")
    return str(path)


@pytest.fixture
def places_file(tmp_path):
    path = tmp_path / "places.json"
    path.write_text(json.dumps(PLACES), encoding="utf-8")
    return str(path)


def test_distance_json(capsys):
    code = main(["distance", "--from", "51.5074,-0.1278", "--to", "48.8566,2.3522", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["unit"] == "km"
    assert out["distance"] == pytest.approx(343.56, abs=0.1)


def test_distance_negative_latitude_with_equals(capsys):
    code = main(["distance", "--from=-33.8688,151.2093", "--to=-37.8136,144.9631", "--unit", "miles"])
    assert code == 0
    assert capsys.readouterr().out.strip().endswith("miles")


def test_default_unit_comes_from_settings(monkeypatch, capsys):
    monkeypatch.setenv("COORDKIT_DEFAULT_DISTANCE_UNIT", "meters")
    main(["distance", "--from", "0,0", "--to", "0,1", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert out["unit"] == "meters"
    assert out["distance"] == pytest.approx(111_195, rel=1e-3)


def test_invalid_coordinate_exits_with_2(capsys):
    code = main(["distance", "--from", "91,0", "--to", "0,0"])
    err = capsys.readouterr().err
    assert code == 2
    assert "coord1 latitude must be between -90 and 90 degrees" in err


def test_malformed_point_is_an_argparse_error():
    with pytest.raises(SystemExit) as exc:
        main(["distance", "--from", "north", "--to", "0,0"])
    assert exc.value.code == 2


def test_area(fence_file, capsys):
    assert main(["area", "--polygon", fence_file, "--unit", "KM2", "--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["unit"] == "km2"
    assert out["area"] == pytest.approx(12_363, rel=0.01)


def test_area_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(FENCE[:2])))
    code = main(["area", "--polygon", "-"])
    assert code == 2
    assert "At least 3 coordinates" in capsys.readouterr().err


def test_contains(fence_file, capsys):
    main(["contains", "--point", "0.5,0.5", "--polygon", fence_file])
    main(["contains", "--point", "2,2", "--polygon", fence_file])
    assert capsys.readouterr().out.split() == ["inside", "outside"]


def test_near(fence_file, capsys):
    main(["near", "--point", "0.5,1.5", "--polygon", fence_file, "--max-distance", "60", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert out["is_near"] is True
    assert out["closest_point"]["lng"] == pytest.approx(1.0)
    assert out["distance"] == pytest.approx(55.6, abs=0.1)


def test_within(places_file, capsys):
    main(["within", "--from", "40.7128,-74.0060", "--points", places_file, "--max-distance", "50", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert [r["name"] for r in out["results"]] == ["Central Park", "Newark"]


def test_within_text_output(places_file, capsys):
    main(["within", "--from", "40.7128,-74.0060", "--points", places_file, "--max-distance", "50"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "2 within 50 km"
    assert "Central Park" in lines[1]


def test_closest_and_furthest(places_file, capsys):
    main(["closest", "--from", "40.7128,-74.0060", "--points", places_file])
    main(["furthest", "--from", "40.7128,-74.0060", "--points", places_file])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Central Park")
    assert lines[1].startswith("Los Angeles")


def test_closest_of_nothing(tmp_path, capsys):
    path = tmp_path / "empty.json"
    path.write_text("[]", encoding="utf-8")
    main(["closest", "--from", "0,0", "--points", str(path), "--json"])
    assert json.loads(capsys.readouterr().out)["result"] is None


def test_unreadable_points_file_exits_with_2(tmp_path, capsys):
    code = main(["closest", "--from", "0,0", "--points", str(tmp_path / "missing.json")])
    assert code == 2
    assert capsys.readouterr().err.startswith("error: cannot read coordinates:")

    bad = tmp_path / "bad.json"
    bad.write_text("[{lat: 1}", encoding="utf-8")
    code = main(["area", "--polygon", str(bad)])
    assert code == 2
    assert "error: cannot read coordinates:" in capsys.readouterr().err
