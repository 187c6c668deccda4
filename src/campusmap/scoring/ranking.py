"""
Result ordering.

Every strategy produces a total order that is stable with respect to the input
order (Python's `sorted` is stable), so equal keys keep catalog order:
- `name`: ascending by case-folded name, then by the raw name (code-point order, locale independent)
- `open`: open resources first
- `distance`: nearest to `ctx.origin` first; a no-op when no origin is known
- `relevance` (default): lower `relevance_score` first
"""

from __future__ import annotations

from typing import Sequence

from campusmap.config.settings import RankingSettings
from campusmap.core.geo import distance_km
from campusmap.domain.models import Instant, QueryContext, Resource, SortStrategy
from campusmap.features.availability import is_open


def relevance_score(
    resource: Resource,
    query: str,
    now: Instant,
    *,
    settings: RankingSettings | None = None,
) -> int:
    """Position of `query` in the case-folded name (or a sentinel), minus a bonus when open.

    Lower is better. An empty query matches at position 0 for every resource.
    """
    cfg = settings or RankingSettings()
    position = resource.name.casefold().find(query.casefold())
    score = cfg.relevance_missing_sentinel if position < 0 else position
    if is_open(resource, now):
        score -= cfg.relevance_open_bonus
    return score


def _name_key(resource: Resource) -> tuple[str, str]:
    return resource.name.casefold(), resource.name


def rank_resources(
    resources: Sequence[Resource],
    ctx: QueryContext,
    now: Instant,
    *,
    settings: RankingSettings | None = None,
) -> list[Resource]:
    """Order already-filtered resources by `ctx.sort`; always returns a new list."""
    strategy = SortStrategy.parse(ctx.sort)

    if strategy is SortStrategy.NAME:
        return sorted(resources, key=_name_key)

    if strategy is SortStrategy.OPEN:
        return sorted(resources, key=lambda r: 0 if is_open(r, now) else 1)

    if strategy is SortStrategy.DISTANCE:
        origin = ctx.origin
        if origin is None:
            return list(resources)
        return sorted(resources, key=lambda r: distance_km(origin, r.location))

    return sorted(resources, key=lambda r: relevance_score(r, ctx.query, now, settings=settings))
