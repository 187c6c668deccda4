"""
Offline catalog report utilities.

Goal: provide a deterministic, network-free view of "is our catalog complete and sane?"
Used by:
- the `catalog-report` CLI command
- the `/api/catalog/meta` endpoint
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from campusmap.domain.models import Category, Resource


@dataclass(frozen=True)
class Issue:
    severity: str  # "info" | "warning" | "error"
    code: str
    message: str
    count: int = 1
    sample: list[str] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
            "count": int(self.count),
            "sample": list(self.sample or []),
        }


def catalog_issues(resources: Sequence[Resource]) -> list[Issue]:
    issues: list[Issue] = []
    if not resources:
        return [Issue(severity="warning", code="CATALOG_EMPTY", message="The catalog has no resources.")]

    no_schedule = [r.id for r in resources if r.schedule is None]
    if no_schedule:
        issues.append(
            Issue(
                severity="info",
                code="CATALOG_NO_SCHEDULE",
                message="Some resources have no posted hours and will always show as closed.",
                count=len(no_schedule),
                sample=no_schedule[:8],
            )
        )

    no_address = [r.id for r in resources if not r.address.strip()]
    if no_address:
        issues.append(
            Issue(
                severity="warning",
                code="CATALOG_MISSING_ADDRESS",
                message="Some resources are missing `address` (text search only sees their name).",
                count=len(no_address),
                sample=no_address[:8],
            )
        )

    names: dict[str, list[str]] = {}
    for r in resources:
        names.setdefault(r.name.casefold(), []).append(r.id)
    dup_names = sorted(i for ids in names.values() if len(ids) > 1 for i in ids)
    if dup_names:
        issues.append(
            Issue(
                severity="warning",
                code="CATALOG_DUPLICATE_NAME",
                message="Several resources share a display name.",
                count=len(dup_names),
                sample=dup_names[:8],
            )
        )
    return issues


def build_catalog_report(resources: Sequence[Resource]) -> dict[str, Any]:
    """Summarize categories/amenities and list catalog issues."""
    category_counts = {c.value: 0 for c in Category}
    amenity_counts: dict[str, int] = {}
    for r in resources:
        category_counts[r.category.value] += 1
        for a in r.amenities:
            amenity_counts[a] = amenity_counts.get(a, 0) + 1

    return {
        "resource_count": len(resources),
        "category_counts": category_counts,
        "amenities": sorted(amenity_counts.keys()),
        "amenity_counts": dict(sorted(amenity_counts.items(), key=lambda kv: (-kv[1], kv[0]))),
        "without_schedule": [r.id for r in resources if r.schedule is None],
        "issues": [i.as_dict() for i in catalog_issues(resources)],
    }
