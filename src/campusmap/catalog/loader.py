"""
Resource catalog loader.

The catalog is a local JSON file (default: `data/catalogs/resources.json`) that
contains campus resources with coordinates, amenities and opening hours. We
validate it into typed Pydantic models so the query engine can assume a
consistent shape.

Two record shapes are accepted:
- the model shape (`location: {lat, lon}`, `schedule: {days, open, close}`)
- the flat export shape (`lat`/`lng` at the top level, `hours` instead of `schedule`)
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

from pydantic import TypeAdapter

from campusmap.core.env import resolve_project_path
from campusmap.domain.models import Resource

logger = logging.getLogger(__name__)

_RESOURCES_ADAPTER = TypeAdapter(list[Resource])


def _normalize_record(record: Any) -> Any:
    if not isinstance(record, dict):
        return record
    out = dict(record)
    if "location" not in out and "lat" in out:
        lon = out.pop("lon", None)
        if lon is None:
            lon = out.pop("lng", None)
        out["location"] = {"lat": out.pop("lat"), "lon": lon}
    if "schedule" not in out and "hours" in out:
        out["schedule"] = out.pop("hours")
    return out


def parse_resources(payload: Any) -> list[Resource]:
    """Validate a decoded catalog payload (a JSON array) into resources."""
    if not isinstance(payload, list):
        raise ValueError("Invalid catalog root; expected a JSON array of resources.")
    resources = _RESOURCES_ADAPTER.validate_python([_normalize_record(r) for r in payload])

    seen: set[str] = set()
    dup: set[str] = set()
    for r in resources:
        if r.id in seen:
            dup.add(r.id)
        seen.add(r.id)
    if dup:
        raise ValueError(f"Duplicate resource ids in catalog: {', '.join(sorted(dup))}")
    return resources


def load_resources(path: str | Path) -> list[Resource]:
    """Load and validate a resource catalog JSON file."""
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    resources = parse_resources(payload)
    logger.debug("Loaded %d resources from %s", len(resources), resolved)
    return resources


@lru_cache
def load_resources_cached(path: str) -> tuple[Resource, ...]:
    """Load a catalog once per path; the tuple is shared read-only between queries."""
    return tuple(load_resources(path))


def find_resource(resources: Sequence[Resource], resource_id: str) -> Resource | None:
    for r in resources:
        if r.id == resource_id:
            return r
    return None
