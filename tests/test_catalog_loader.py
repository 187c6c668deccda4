import json

import pytest
from pydantic import ValidationError

from campusmap.catalog.loader import find_resource, load_resources, parse_resources
from campusmap.domain.models import Category, Weekday


def test_packaged_catalog_loads_in_file_order():
    resources = load_resources("data/catalogs/resources.json")
    assert [r.id for r in resources] == ["1", "2", "3", "4", "5", "6"]
    assert {r.category for r in resources} == set(Category)

    benton = find_resource(resources, "2")
    assert benton is not None
    assert benton.schedule.open == 9 * 60
    assert benton.schedule.close == 21 * 60
    assert Weekday.SAT not in benton.schedule.days
    assert find_resource(resources, "missing") is None


def test_flat_export_shape_is_normalized(tmp_path):
    payload = [
        {
            "id": 7,
            "name": "Shriver Center Lab",
            "category": "lab",
            "lat": 39.5087,
            "lng": -84.7401,
            "address": "701 E Spring St",
            "amenities": ["Computers", " power ", ""],
            "hours": {"open": "08:30", "close": "17:00", "days": ["Mon", "Wed"]},
        }
    ]
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    (r,) = load_resources(path)
    assert r.id == "7"
    assert (r.location.lat, r.location.lon) == (39.5087, -84.7401)
    assert r.amenities == frozenset({"computers", "power"})
    assert r.schedule.open == 510
    assert r.schedule.days == frozenset({Weekday.MON, Weekday.WED})


def test_resource_without_hours_has_no_schedule():
    (r,) = parse_resources(
        [{"id": "x", "name": "Kiosk", "category": "service", "location": {"lat": 0, "lon": 0}}]
    )
    assert r.schedule is None
    assert r.address == ""


def test_duplicate_ids_are_rejected():
    record = {"id": "dup", "name": "A", "category": "study", "location": {"lat": 0, "lon": 0}}
    with pytest.raises(ValueError, match="Duplicate resource ids"):
        parse_resources([record, {**record, "name": "B"}])


def test_non_array_root_is_rejected():
    with pytest.raises(ValueError, match="expected a JSON array"):
        parse_resources({"id": "x"})


def test_invalid_records_fail_validation():
    with pytest.raises(ValidationError):
        parse_resources([{"id": "x", "name": "Pool", "category": "gym", "location": {"lat": 0, "lon": 0}}])
    with pytest.raises(ValidationError):
        parse_resources(
            [
                {
                    "id": "y",
                    "name": "Late Cafe",
                    "category": "dining",
                    "location": {"lat": 0, "lon": 0},
                    "schedule": {"days": ["Fri"], "open": "20:00", "close": "01:00"},
                }
            ]
        )


def test_resources_serialize_deterministically():
    (r,) = parse_resources(
        [
            {
                "id": "z",
                "name": "Study",
                "category": "study",
                "location": {"lat": 1, "lon": 2},
                "amenities": ["wifi", "accessible"],
                "schedule": {"days": ["Sun", "Mon"], "open": 480, "close": "20:15"},
            }
        ]
    )
    data = r.model_dump(mode="json")
    assert data["amenities"] == ["accessible", "wifi"]
    assert data["schedule"] == {"days": ["Mon", "Sun"], "open": "08:00", "close": "20:15"}
