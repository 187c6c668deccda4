from __future__ import annotations

# This module is the "orchestrator" for a directory query.
# It wires together:
# - domain input (QueryContext + the caller-supplied Instant)
# - the catalog (loaded once and shared read-only)
# - filtering (features.filters) and ordering (scoring.ranking)
# - display annotations (open status, distance in miles) on the way out
#
# The engine never reads the clock. CLI/API take one `campus_now` reading, turn it
# into an Instant with `resolve_instant` and pass it (plus `generated_at`) to `search`.

import logging
import time
from datetime import datetime
from typing import Any, Mapping, Sequence
from zoneinfo import ZoneInfo

from campusmap.catalog.loader import load_resources_cached
from campusmap.config.overrides import apply_settings_overrides
from campusmap.config.settings import Settings, get_settings
from campusmap.core.geo import distance_km, km_to_miles
from campusmap.core.time import ensure_tz
from campusmap.domain.models import (
    Instant,
    QueryContext,
    Resource,
    SearchResult,
    SearchResultItem,
    SortStrategy,
)
from campusmap.features.availability import is_open
from campusmap.features.filters import filter_resources
from campusmap.scoring.ranking import rank_resources, relevance_score

logger = logging.getLogger(__name__)


def campus_now(timezone: str) -> datetime:
    """Current wall-clock time in the campus timezone."""
    return datetime.now(ZoneInfo(timezone))


def resolve_instant(at: datetime | None, timezone: str) -> Instant:
    """Turn a datetime (or the current wall clock when None) into a campus-local Instant.

    Naive datetimes are interpreted in `timezone`.
    """
    if at is None:
        at = campus_now(timezone)
    return Instant.from_datetime(ensure_tz(at, timezone), timezone)


def _annotate(
    resource: Resource,
    ctx: QueryContext,
    now: Instant,
    *,
    settings: Settings,
) -> SearchResultItem:
    dist_km: float | None = None
    dist_mi: float | None = None
    if ctx.origin is not None:
        raw_km = distance_km(ctx.origin, resource.location)
        decimals = settings.display.distance_decimals
        dist_km = round(raw_km, decimals)
        dist_mi = round(km_to_miles(raw_km), decimals)
    return SearchResultItem(
        resource=resource,
        is_open=is_open(resource, now),
        relevance_score=relevance_score(resource, ctx.query, now, settings=settings.ranking),
        distance_km=dist_km,
        distance_mi=dist_mi,
    )


def search(
    ctx: QueryContext,
    now: Instant,
    *,
    settings: Settings | None = None,
    resources: Sequence[Resource] | None = None,
    settings_overrides: Mapping[str, Any] | None = None,
    generated_at: datetime | None = None,
) -> SearchResult:
    """Filter then rank the catalog for `ctx` at `now`, returning annotated results.

    `generated_at` is display metadata copied onto the result as given; it does
    not influence filtering or ordering.
    """
    t0 = time.monotonic()

    # Injected settings (tests) or the packaged YAML defaults.
    settings = settings or get_settings()
    # Raises ValueError for disallowed keys; the API maps it to a 400.
    settings = apply_settings_overrides(settings, settings_overrides)

    if resources is None:
        resources = load_resources_cached(settings.catalog.path)

    filtered = filter_resources(resources, ctx, now)
    ranked = rank_resources(filtered, ctx, now, settings=settings.ranking)
    items = [_annotate(r, ctx, now, settings=settings) for r in ranked]

    if ctx.sort is SortStrategy.DISTANCE and ctx.origin is None:
        logger.debug("Distance sort requested without an origin; keeping catalog order")

    elapsed_ms = int((time.monotonic() - t0) * 1000)
    logger.info(
        "search query=%r sort=%s at=%s: %d/%d resources matched (%d ms)",
        ctx.query,
        ctx.sort.value,
        now,
        len(items),
        len(resources),
        elapsed_ms,
    )

    return SearchResult(
        generated_at=generated_at,
        instant=now,
        context=ctx,
        count=len(items),
        results=items,
        meta={"catalog_size": len(resources), "search_ms": elapsed_ms},
    )
