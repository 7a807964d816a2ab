"""Tests for geodesy value objects and distance services.

pyproj's WGS84 geodesic is used as an independent oracle: the spherical
haversine must agree with it to within the sphere/ellipsoid discrepancy.
"""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError
from pyproj import Geod

from domain.geodesy.services import (
    EARTH_RADIUS_M,
    distance_between,
    haversine_distance,
    rectangle_area_km2,
)
from domain.geodesy.value_objects import GeoArea, GeoPoint

_wgs84 = Geod(ellps="WGS84")

SPHERE_VS_ELLIPSOID_RTOL = 0.006  # 0.6%


# ===========================================================================
# haversine_distance
# ===========================================================================
@pytest.mark.parametrize(
    "lat, lon",
    [(0.0, 0.0), (-23.55, -46.63), (89.9, 179.9), (-90.0, -180.0)],
)
def test_distance_to_self_is_zero(lat: float, lon: float) -> None:
    assert haversine_distance(lat, lon, lat, lon) == 0


@pytest.mark.parametrize(
    "a, b",
    [
        ((0.0, 0.0), (1.0, 1.0)),
        ((-20.0, -45.0), (-20.1, -45.1)),
        ((51.5, -0.12), (40.71, -74.0)),
        ((10.0, 179.5), (10.0, -179.5)),  # antimeridian
    ],
)
def test_distance_is_symmetric(a: tuple[float, float], b: tuple[float, float]) -> None:
    assert haversine_distance(*a, *b) == haversine_distance(*b, *a)


def test_one_degree_of_latitude() -> None:
    """One degree along a meridian is R * pi / 180."""
    expected = EARTH_RADIUS_M * math.pi / 180
    assert haversine_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected, rel=1e-12)


def test_antimeridian_uses_short_way() -> None:
    d = haversine_distance(0.0, 179.5, 0.0, -179.5)
    assert d == pytest.approx(EARTH_RADIUS_M * math.radians(1.0), rel=1e-9)


@pytest.mark.parametrize(
    "a, b",
    [
        ((-20.0, -45.0), (-20.1, -45.1)),
        ((0.0, 0.0), (1.0, 1.0)),
        ((-23.57, -46.66), (-23.55, -46.64)),
        ((60.0, 10.0), (61.0, 12.0)),
    ],
)
def test_agrees_with_wgs84_geodesic(
    a: tuple[float, float], b: tuple[float, float]
) -> None:
    _, _, geodesic = _wgs84.inv(a[1], a[0], b[1], b[0])
    assert haversine_distance(*a, *b) == pytest.approx(
        geodesic, rel=SPHERE_VS_ELLIPSOID_RTOL
    )


def test_non_finite_input_yields_nan() -> None:
    assert math.isnan(haversine_distance(float("nan"), 0.0, 0.0, 0.0))


def test_distance_between_points() -> None:
    a = GeoPoint(latitude=-20.0, longitude=-45.0)
    b = GeoPoint(latitude=-20.1, longitude=-45.1)
    assert distance_between(a, b) == haversine_distance(-20.0, -45.0, -20.1, -45.1)


# ===========================================================================
# rectangle_area_km2
# ===========================================================================
def test_rectangle_area_unit_square_at_equator() -> None:
    side_km = EARTH_RADIUS_M * math.radians(1.0) / 1000
    area = GeoArea.from_bounds(south=0.0, west=0.0, north=1.0, east=1.0)
    assert rectangle_area_km2(area) == pytest.approx(side_km**2, rel=1e-9)


def test_rectangle_area_shrinks_with_latitude() -> None:
    equator = GeoArea.from_bounds(south=0.0, west=0.0, north=1.0, east=1.0)
    north = GeoArea.from_bounds(south=60.0, west=0.0, north=61.0, east=1.0)
    # East-west edge is measured along the southern edge: cos(60) = 0.5
    assert rectangle_area_km2(north) == pytest.approx(
        rectangle_area_km2(equator) * 0.5, rel=1e-3
    )


# ===========================================================================
# Value Objects
# ===========================================================================
class TestGeoPoint:
    def test_value_equality(self) -> None:
        assert GeoPoint(latitude=1, longitude=2) == GeoPoint(latitude=1, longitude=2)

    def test_is_frozen(self) -> None:
        p = GeoPoint(latitude=1, longitude=2)
        with pytest.raises(ValidationError):
            p.latitude = 3  # type: ignore[misc]

    @pytest.mark.parametrize(
        "lat, lon",
        [(91.0, 0.0), (-91.0, 0.0), (0.0, 181.0), (0.0, -181.0)],
    )
    def test_out_of_range_rejected(self, lat: float, lon: float) -> None:
        with pytest.raises(ValidationError):
            GeoPoint(latitude=lat, longitude=lon)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, bad: float) -> None:
        with pytest.raises(ValidationError):
            GeoPoint(latitude=bad, longitude=0.0)


class TestGeoArea:
    def test_accepts_camel_case_record(self) -> None:
        area = GeoArea.model_validate(
            {
                "northEast": {"latitude": 1.0, "longitude": 1.0},
                "southWest": {"latitude": 0.0, "longitude": 0.0},
            }
        )
        assert area.north_east == GeoPoint(latitude=1.0, longitude=1.0)
        assert area.model_dump(by_alias=True)["southWest"] == {
            "latitude": 0.0,
            "longitude": 0.0,
        }

    def test_spans(self) -> None:
        area = GeoArea.from_bounds(south=-25.0, west=-50.0, north=-15.0, east=-40.0)
        assert area.lat_span == pytest.approx(10.0)
        assert area.lng_span == pytest.approx(10.0)
        assert area.is_well_ordered()

    def test_inverted_area_constructs_but_is_not_well_ordered(self) -> None:
        area = GeoArea.from_bounds(south=1.0, west=0.0, north=0.0, east=1.0)
        assert area.lat_span < 0
        assert not area.is_well_ordered()

    def test_zero_span_is_not_well_ordered(self) -> None:
        area = GeoArea.from_bounds(south=0.0, west=0.0, north=0.0, east=1.0)
        assert not area.is_well_ordered()

    def test_contains_is_edge_inclusive(self) -> None:
        area = GeoArea.from_bounds(south=0.0, west=0.0, north=1.0, east=1.0)
        assert area.contains(GeoPoint(latitude=0.0, longitude=1.0))
        assert area.contains(GeoPoint(latitude=0.5, longitude=0.5))
        assert not area.contains(GeoPoint(latitude=1.1, longitude=0.5))
