# src/coordkit/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/coordkit/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `COORDKIT_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (`COORDKIT_LOG_LEVEL`, `COORDKIT_DEFAULT_DISTANCE_UNIT`,
  `COORDKIT_DEFAULT_AREA_UNIT`)

The geometry functions themselves never read settings; only the CLI and API do
(default units, logging, request limits).
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from coordkit.core.env import load_dotenv_if_present, resolve_project_path
from coordkit.domain.units import AreaUnit, DistanceUnit


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `coordkit.config`."""
    text = resources.files("coordkit.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "coordkit"
    log_level: str = "INFO"


class UnitSettings(BaseModel):
    distance: DistanceUnit = DistanceUnit.KM
    area: AreaUnit = AreaUnit.KM2

    # Accept "KM", "Miles2", ... the same way the geometry functions do.
    @field_validator("distance", "area", mode="before")
    @classmethod
    def _lower(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class ApiSettings(BaseModel):
    cors_origins: list[str] = Field(default_factory=list)
    max_coordinates: int = Field(10_000, ge=1)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    units: UnitSettings = Field(default_factory=UnitSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    data = dict(data)
    log_level = os.getenv("COORDKIT_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    distance_unit = os.getenv("COORDKIT_DEFAULT_DISTANCE_UNIT")
    if distance_unit:
        data.setdefault("units", {})["distance"] = distance_unit

    area_unit = os.getenv("COORDKIT_DEFAULT_AREA_UNIT")
    if area_unit:
        data.setdefault("units", {})["area"] = area_unit

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("COORDKIT_CONFIG_PATH")
    raw = _read_yaml_file(resolve_project_path(config_path)) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
