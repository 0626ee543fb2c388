from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from coordkit.config.settings import get_logging_config, get_settings
from coordkit.core.logging import configure_logging
from coordkit.domain.units import AreaUnit, DistanceUnit


def test_packaged_defaults():
    settings = get_settings()

    assert settings.app.name == "coordkit"
    assert settings.units.distance is DistanceUnit.KM
    assert settings.units.area is AreaUnit.KM2
    assert settings.api.max_coordinates == 10_000
    # Cached: the same object comes back until the cache is cleared.
    assert get_settings() is settings


def test_env_overrides_default_units(monkeypatch):
    monkeypatch.setenv("COORDKIT_DEFAULT_DISTANCE_UNIT", "MILES")
    monkeypatch.setenv("COORDKIT_DEFAULT_AREA_UNIT", "meters2")
    monkeypatch.setenv("COORDKIT_LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.units.distance is DistanceUnit.MILES
    assert settings.units.area is AreaUnit.METERS2
    assert settings.app.log_level == "debug"


def test_bad_default_unit_fails_at_load_time(monkeypatch):
    monkeypatch.setenv("COORDKIT_DEFAULT_DISTANCE_UNIT", "leagues")
    with pytest.raises(ValidationError):
        get_settings()


def test_external_config_file(monkeypatch, tmp_path):
    path = tmp_path / "coordkit.yaml"
    path.write_text("units:\n  area: miles2\napi:\n  max_coordinates: 5\n", encoding="utf-8")
    monkeypatch.setenv("COORDKIT_CONFIG_PATH", str(path))

    settings = get_settings()
    assert settings.units.area is AreaUnit.MILES2
    assert settings.units.distance is DistanceUnit.KM
    assert settings.api.max_coordinates == 5


def test_external_config_must_be_a_mapping(monkeypatch, tmp_path):
    path = tmp_path / "coordkit.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    monkeypatch.setenv("COORDKIT_CONFIG_PATH", str(path))
    with pytest.raises(ValueError, match="expected a mapping"):
        get_settings()


def test_dotenv_file_is_loaded_without_overriding(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("COORDKIT_DEFAULT_AREA_UNIT=miles2\nCOORDKIT_LOG_LEVEL=ERROR\n", encoding="utf-8")
    monkeypatch.setenv("COORDKIT_ENV_FILE", str(env_file))
    monkeypatch.setenv("COORDKIT_LOG_LEVEL", "WARNING")
    # Registered with monkeypatch so the value loaded from .env is removed afterwards.
    monkeypatch.setenv("COORDKIT_DEFAULT_AREA_UNIT", "")
    monkeypatch.delenv("COORDKIT_DEFAULT_AREA_UNIT")

    settings = get_settings()
    assert settings.units.area is AreaUnit.MILES2
    assert settings.app.log_level == "WARNING"


def test_configure_logging_applies_level(monkeypatch):
    monkeypatch.setenv("COORDKIT_LOG_LEVEL", "warning")
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, list(root.handlers)
    try:
        configure_logging()
        assert root.level == logging.WARNING
        # The cached YAML payload is left untouched.
        assert get_logging_config()["root"]["level"] == "INFO"
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
