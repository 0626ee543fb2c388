from __future__ import annotations

import pytest

from coordkit.config.settings import get_logging_config, get_settings
from coordkit.core.env import get_project_root, load_dotenv_if_present


def _clear_caches() -> None:
    get_settings.cache_clear()
    get_logging_config.cache_clear()
    load_dotenv_if_present.cache_clear()
    get_project_root.cache_clear()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    # Keep a developer's `.env` and shell exports out of the tests.
    for name in [
        "COORDKIT_CONFIG_PATH",
        "COORDKIT_LOG_LEVEL",
        "COORDKIT_DEFAULT_DISTANCE_UNIT",
        "COORDKIT_DEFAULT_AREA_UNIT",
        "COORDKIT_PROJECT_ROOT",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("COORDKIT_ENV_FILE", str(tmp_path / "missing.env"))
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture
def new_york():
    return {"lat": 40.7128, "lng": -74.0060}


@pytest.fixture
def los_angeles():
    return {"lat": 34.0522, "lng": -118.2437}


@pytest.fixture
def central_park_rect():
    return [
        {"lat": 40.7829, "lng": -73.9654},
        {"lat": 40.7829, "lng": -73.9489},
        {"lat": 40.7648, "lng": -73.9489},
        {"lat": 40.7648, "lng": -73.9654},
        {"lat": 40.7829, "lng": -73.9654},
    ]


@pytest.fixture
def unit_square():
    # One degree square at the origin, listed counter-clockwise in (lng, lat).
    return [
        {"lat": 0.0, "lng": 0.0},
        {"lat": 0.0, "lng": 1.0},
        {"lat": 1.0, "lng": 1.0},
        {"lat": 1.0, "lng": 0.0},
    ]
