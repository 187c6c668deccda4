import math

import pytest
from pydantic import ValidationError

from campusmap.core.geo import distance_km, km_to_miles
from campusmap.domain.models import Coordinate


POINTS = [
    Coordinate(lat=39.5094, lon=-84.7389),
    Coordinate(lat=0.0, lon=0.0),
    Coordinate(lat=90.0, lon=0.0),
    Coordinate(lat=-90.0, lon=180.0),
    Coordinate(lat=-33.8688, lon=151.2093),
    Coordinate(lat=12.5, lon=-180.0),
]


@pytest.mark.parametrize("point", POINTS)
def test_distance_to_self_is_exactly_zero(point):
    assert distance_km(point, point) == 0.0


def test_distance_is_symmetric():
    for a in POINTS:
        for b in POINTS:
            assert distance_km(a, b) == pytest.approx(distance_km(b, a), abs=1e-9)
            assert distance_km(a, b) >= 0.0


def test_one_degree_along_the_equator():
    d = distance_km(Coordinate(lat=0, lon=0), Coordinate(lat=0, lon=1))
    assert d == pytest.approx(6371 * math.pi / 180, rel=1e-9)


def test_antimeridian_uses_the_short_way_round():
    a = Coordinate(lat=0, lon=179.5)
    b = Coordinate(lat=0, lon=-179.5)
    assert distance_km(a, b) == pytest.approx(6371 * math.pi / 180, rel=1e-9)


def test_points_on_the_pole_collapse_regardless_of_longitude():
    a = Coordinate(lat=90, lon=0)
    b = Coordinate(lat=90, lon=120)
    assert distance_km(a, b) == pytest.approx(0.0, abs=1e-6)


def test_antipodal_points_are_half_the_circumference():
    d = distance_km(Coordinate(lat=0, lon=0), Coordinate(lat=0, lon=180))
    assert d == pytest.approx(6371 * math.pi, rel=1e-9)


def test_km_to_miles():
    assert km_to_miles(10) == pytest.approx(6.21371)
    assert km_to_miles(0) == 0


@pytest.mark.parametrize("lat,lon", [(91, 0), (-90.5, 0), (0, 180.01), (0, -181)])
def test_out_of_range_coordinates_are_rejected(lat, lon):
    with pytest.raises(ValidationError):
        Coordinate(lat=lat, lon=lon)
