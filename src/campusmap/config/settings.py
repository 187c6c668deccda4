# src/campusmap/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/campusmap/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `CAMPUSMAP_LOG_LEVEL`, `CAMPUSMAP_CATALOG_PATH`)
- an external YAML file via `CAMPUSMAP_CONFIG_PATH`

Design rule:
- Tuning knobs live in YAML, not hard-coded in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from campusmap.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `campusmap.config`."""
    text = resources.files("campusmap.config").joinpath(filename).read_text(encoding="utf-8")
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
    name: str = "Campus Map"
    timezone: str = "America/New_York"
    log_level: str = "INFO"


class CatalogSettings(BaseModel):
    path: str = "data/catalogs/resources.json"


class RankingSettings(BaseModel):
    default_sort: str = "relevance"
    # Score given to resources whose name does not contain the query.
    relevance_missing_sentinel: int = Field(9999, ge=0)
    # Subtracted from the relevance score of currently open resources.
    relevance_open_bonus: int = Field(10, ge=0)


class DisplaySettings(BaseModel):
    distance_decimals: int = Field(1, ge=0, le=6)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)
    log_level = os.getenv("CAMPUSMAP_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    timezone = os.getenv("CAMPUSMAP_TIMEZONE")
    if timezone:
        data.setdefault("app", {})["timezone"] = timezone

    catalog_path = os.getenv("CAMPUSMAP_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("CAMPUSMAP_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
