"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- catalog entities (`Resource`, `Schedule`, `Coordinate`)
- query inputs (`QueryContext`, `Instant`, `SearchRequest`)
- annotated search output (`SearchResult`)

Catalog and query values are frozen: the engine only reads them, and a new
`QueryContext` is built for every query instead of mutating a shared one.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from campusmap.core.time import WEEKDAY_NAMES, format_time_of_day, local_weekday_and_minutes, parse_time_of_day


def _coerce_time_of_day(value: Any) -> Any:
    if isinstance(value, str):
        return parse_time_of_day(value)
    return value


# Minutes since midnight; accepts `HH:MM` strings at load time.
TimeOfDay = Annotated[int, BeforeValidator(_coerce_time_of_day), Field(ge=0, le=1439)]


def _normalize_tags(tags: Any) -> Any:
    if isinstance(tags, str):
        tags = tags.split(",")
    if isinstance(tags, (list, tuple, set, frozenset)):
        return frozenset(str(t).strip().casefold() for t in tags if t is not None and str(t).strip())
    return tags


class Weekday(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @classmethod
    def _missing_(cls, value: object) -> "Weekday | None":
        # Exact 3-letter token or full English name, any case ("mon", "MONDAY").
        if isinstance(value, str):
            return _WEEKDAY_ALIASES.get(value.strip().casefold())
        return None

    @property
    def position(self) -> int:
        return WEEKDAY_NAMES.index(self.value)


_WEEKDAY_FULL_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_WEEKDAY_ALIASES: dict[str, Weekday] = {
    **{d.value.casefold(): d for d in Weekday},
    **{full: d for d, full in zip(Weekday, _WEEKDAY_FULL_NAMES)},
}


def _coerce_weekday(value: Any) -> Any:
    if isinstance(value, str):
        # Raises ValueError for anything that is not a weekday name.
        return Weekday(value)
    return value


WeekdayName = Annotated[Weekday, BeforeValidator(_coerce_weekday)]


class Category(str, Enum):
    STUDY = "study"
    LAB = "lab"
    TUTORING = "tutoring"
    DINING = "dining"
    SERVICE = "service"


class SortStrategy(str, Enum):
    RELEVANCE = "relevance"
    NAME = "name"
    OPEN = "open"
    DISTANCE = "distance"

    @classmethod
    def parse(cls, value: Any) -> "SortStrategy":
        """Resolve a raw sort key; anything unrecognized falls back to relevance."""
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower().replace("_", "-")
        if key == "open-first":
            key = "open"
        try:
            return cls(key)
        except ValueError:
            return cls.RELEVANCE


class Coordinate(BaseModel):
    """A geographic point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class Instant(BaseModel):
    """A locale-independent point in the week: weekday + minutes since midnight."""

    model_config = ConfigDict(frozen=True)

    weekday: WeekdayName
    minutes_of_day: TimeOfDay

    @classmethod
    def from_datetime(cls, dt: datetime, timezone: str) -> "Instant":
        weekday, minutes = local_weekday_and_minutes(dt, timezone)
        return cls(weekday=Weekday(weekday), minutes_of_day=minutes)

    def __str__(self) -> str:
        return f"{self.weekday.value} {format_time_of_day(self.minutes_of_day)}"


class Schedule(BaseModel):
    """Weekly opening hours: the same open/close window on each listed day.

    Windows that cross midnight (close before open) are rejected.
    """

    model_config = ConfigDict(frozen=True)

    days: frozenset[WeekdayName]
    open: TimeOfDay
    close: TimeOfDay

    @model_validator(mode="after")
    def _validate_order(self) -> "Schedule":
        if self.close < self.open:
            raise ValueError(
                "schedule.close must not be before schedule.open; overnight windows are not supported"
            )
        return self

    @field_serializer("days")
    def _serialize_days(self, days: frozenset[Weekday]) -> list[str]:
        return [d.value for d in sorted(days, key=lambda d: d.position)]

    @field_serializer("open", "close")
    def _serialize_time(self, minutes: int) -> str:
        return format_time_of_day(minutes)


class Resource(BaseModel):
    """A campus location or service entry in the directory."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: Category
    location: Coordinate
    address: str = ""
    amenities: frozenset[str] = Field(default_factory=frozenset)
    schedule: Schedule | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("amenities", mode="before")
    @classmethod
    def _normalize_amenities(cls, amenities: Any) -> Any:
        return _normalize_tags(amenities)

    @field_serializer("amenities")
    def _serialize_amenities(self, amenities: frozenset[str]) -> list[str]:
        return sorted(amenities)


class QueryContext(BaseModel):
    """The full set of active search/filter/sort criteria for one query."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    category: Category | None = None
    amenities: frozenset[str] = Field(default_factory=frozenset)
    open_only: bool = False
    sort: SortStrategy = SortStrategy.RELEVANCE
    origin: Coordinate | None = None

    @field_validator("query", mode="before")
    @classmethod
    def _normalize_query(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip().casefold()
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _empty_category(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("amenities", mode="before")
    @classmethod
    def _normalize_amenities(cls, amenities: Any) -> Any:
        if amenities is None:
            return frozenset()
        return _normalize_tags(amenities)

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value: Any) -> SortStrategy:
        return SortStrategy.parse(value)

    @field_serializer("amenities")
    def _serialize_amenities(self, amenities: frozenset[str]) -> list[str]:
        return sorted(amenities)

    def with_origin(self, origin: Coordinate | None) -> "QueryContext":
        """Return a new context with the origin replaced (e.g. once a position arrives)."""
        return self.model_copy(update={"origin": origin})


class SearchRequest(BaseModel):
    """API request payload: criteria plus an optional explicit evaluation time."""

    context: QueryContext = Field(default_factory=QueryContext)
    at: datetime | None = None
    settings_overrides: dict[str, Any] | None = None


class SearchResultItem(BaseModel):
    """One ranked output item plus derived display values."""

    resource: Resource
    is_open: bool
    relevance_score: int
    distance_km: float | None = None
    distance_mi: float | None = None


class SearchResult(BaseModel):
    """Ordered search results plus the criteria and instant they were computed for."""

    generated_at: datetime | None = None
    instant: Instant
    context: QueryContext
    count: int
    results: list[SearchResultItem]
    meta: dict[str, Any] = Field(default_factory=dict)
