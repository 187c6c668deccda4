"""
API routes.

Endpoints:
- POST `/api/search`: main query entrypoint (filter + rank + annotate).
- GET  `/api/resources`: the full catalog in dataset order.
- GET  `/api/resources/{resource_id}`: one resource.
- GET  `/api/catalog/meta`: catalog summary (categories, amenities, issues).
- GET  `/api/settings`: public settings for a frontend.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from campusmap.catalog.loader import find_resource, load_resources_cached
from campusmap.config.settings import get_settings
from campusmap.directory.search import campus_now, resolve_instant, search
from campusmap.domain.models import Resource, SearchRequest, SearchResult, SortStrategy
from campusmap.quality.report import build_catalog_report

router = APIRouter()


def _resources() -> tuple[Resource, ...]:
    settings = get_settings()
    return load_resources_cached(settings.catalog.path)


@router.post("/api/search", response_model=SearchResult)
def post_search(request: SearchRequest) -> SearchResult:
    """Run a directory query; `at` defaults to the current campus-local time."""
    settings = get_settings()
    ctx = request.context
    if "sort" not in ctx.model_fields_set:
        ctx = ctx.model_copy(update={"sort": SortStrategy.parse(settings.ranking.default_sort)})
    try:
        stamp = campus_now(settings.app.timezone)
        now = resolve_instant(request.at or stamp, settings.app.timezone)
        return search(
            ctx,
            now,
            settings=settings,
            resources=_resources(),
            settings_overrides=request.settings_overrides,
            generated_at=stamp,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail={"code": "VALIDATION_ERROR", "message": str(e)},
        ) from e


@router.get("/api/resources", response_model=list[Resource])
def get_resources() -> list[Resource]:
    return list(_resources())


@router.get("/api/resources/{resource_id}", response_model=Resource)
def get_resource(resource_id: str) -> Resource:
    resource = find_resource(_resources(), resource_id)
    if resource is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "NOT_FOUND", "message": f"Unknown resource id '{resource_id}'"},
        )
    return resource


@router.get("/api/catalog/meta")
def get_catalog_meta() -> dict:
    """Return catalog metadata (category/amenity counts, data issues)."""
    settings = get_settings()
    report = build_catalog_report(_resources())
    return {"catalog_path": settings.catalog.path, **report}


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return safe-to-expose settings for frontend defaults."""
    settings = get_settings()
    data = settings.model_dump(mode="json")
    return {
        "app": {"name": data["app"]["name"], "timezone": data["app"]["timezone"]},
        "ranking": data["ranking"],
        "display": data["display"],
        "sort_strategies": [s.value for s in SortStrategy],
    }
