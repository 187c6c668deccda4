# src/campusmap/features/filters.py
"""
Candidate filtering (single pass over the catalog).

A resource survives only if every active criterion of the `QueryContext` holds:
- text: the query is a case-insensitive substring of the name or the address
- category: exact match
- amenities: the resource has *all* requested amenities (AND, not ANY)
- availability: open at `now` when `open_only` is set

Inactive criteria (empty query/category/amenities, `open_only=False`) always pass,
so adding a criterion can only shrink the result.
"""

from __future__ import annotations

from typing import Sequence

from campusmap.domain.models import Instant, QueryContext, Resource
from campusmap.features.availability import is_open


def matches_text(resource: Resource, ctx: QueryContext, now: Instant) -> bool:
    # `ctx.query` is already stripped and case-folded.
    if not ctx.query:
        return True
    return ctx.query in resource.name.casefold() or ctx.query in resource.address.casefold()


def matches_category(resource: Resource, ctx: QueryContext, now: Instant) -> bool:
    return ctx.category is None or resource.category == ctx.category


def matches_amenities(resource: Resource, ctx: QueryContext, now: Instant) -> bool:
    return not ctx.amenities or ctx.amenities.issubset(resource.amenities)


def matches_availability(resource: Resource, ctx: QueryContext, now: Instant) -> bool:
    return not ctx.open_only or is_open(resource, now)


PREDICATES = (matches_text, matches_category, matches_amenities, matches_availability)


def passes_filters(resource: Resource, ctx: QueryContext, now: Instant) -> bool:
    """Return True if `resource` satisfies every active criterion in `ctx`."""
    return all(predicate(resource, ctx, now) for predicate in PREDICATES)


def filter_resources(resources: Sequence[Resource], ctx: QueryContext, now: Instant) -> list[Resource]:
    """Return the resources passing `ctx`, in their original order (new list)."""
    return [r for r in resources if passes_filters(r, ctx, now)]
