"""Tests for yieldengine.geometry: azimuth conventions and roof sizing."""

from __future__ import annotations

import math

import pytest

from yieldengine.geometry.angles import (
    Angles,
    compass_to_solar_azimuth,
    normalize_azimuth,
    solar_to_compass_azimuth,
    to_radians,
)
from yieldengine.geometry.roof import (
    USABLE_AREA_FRACTION,
    LatLng,
    build_roof_selection,
    polygon_centroid,
    spherical_polygon_area,
    usable_area,
)


def _circular_diff(a: float, b: float) -> float:
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


# ======================================================================
# Angle conventions
# ======================================================================


class TestAngles:
    def test_to_radians(self):
        assert to_radians(180.0) == pytest.approx(math.pi)
        assert to_radians(0.0) == 0.0

    @pytest.mark.parametrize(
        "deg, expected",
        [(0.0, 0.0), (360.0, 0.0), (-90.0, 270.0), (725.0, 5.0), (-725.0, 355.0), (359.5, 359.5)],
    )
    def test_normalize_folds_into_range(self, deg, expected):
        assert normalize_azimuth(deg) == pytest.approx(expected)

    @pytest.mark.parametrize("deg", [-1e-15, -1080.25, -359.999, -0.5, 0.0, 17.3, 359.999, 360.0, 1e6])
    def test_normalize_idempotent(self, deg):
        once = normalize_azimuth(deg)
        assert 0.0 <= once < 360.0
        assert normalize_azimuth(once) == once

    @pytest.mark.parametrize("compass, solar", [(0.0, 180.0), (180.0, 0.0), (90.0, 270.0), (270.0, 90.0)])
    def test_compass_to_solar(self, compass, solar):
        """North-facing is 180 deg from South; East is -90 (270) in solar convention."""
        assert compass_to_solar_azimuth(compass) == pytest.approx(solar)

    def test_round_trip_over_full_circle(self):
        for tenth in range(0, 3600, 7):
            d = tenth / 10.0
            back = solar_to_compass_azimuth(compass_to_solar_azimuth(d))
            assert _circular_diff(back, d) < 1e-9, f"round trip failed for {d}"

    def test_inverse_round_trip(self):
        for d in (0.0, 45.5, 180.0, 333.3):
            back = compass_to_solar_azimuth(solar_to_compass_azimuth(d))
            assert _circular_diff(back, d) < 1e-9

    def test_angles_properties(self):
        a = Angles(beta_deg=30.0, gamma_deg=0.0)
        assert a.beta_rad == pytest.approx(math.pi / 6)
        assert a.gamma_solar_rad == pytest.approx(math.pi)


# ======================================================================
# Roof sizing
# ======================================================================


SQUARE = [
    LatLng(-23.5, -46.6),
    LatLng(-23.5005, -46.6),
    LatLng(-23.5005, -46.6005),
    LatLng(-23.5, -46.6005),
]


class TestRoofSelection:
    def test_usable_fraction(self):
        assert USABLE_AREA_FRACTION == 0.7
        assert usable_area(120.0) == pytest.approx(84.0)

    def test_spherical_area_of_small_square(self):
        """0.0005 deg square at 23.5 S: ~55.7 m x ~51.0 m."""
        side_ns = math.radians(0.0005) * 6_378_137.0
        side_ew = side_ns * math.cos(math.radians(23.50025))
        assert spherical_polygon_area(SQUARE) == pytest.approx(side_ns * side_ew, rel=0.01)

    def test_area_independent_of_winding(self):
        assert spherical_polygon_area(SQUARE) == pytest.approx(
            spherical_polygon_area(list(reversed(SQUARE)))
        )

    def test_area_across_antimeridian(self):
        """Longitude steps wrap, so a roof on the date line keeps its size."""
        east = [LatLng(-16.0, 179.9995), LatLng(-16.0005, 179.9995), LatLng(-16.0005, 180.0), LatLng(-16.0, 180.0)]
        across = [LatLng(-16.0, 179.9997), LatLng(-16.0005, 179.9997), LatLng(-16.0005, -179.9998), LatLng(-16.0, -179.9998)]
        assert spherical_polygon_area(across) == pytest.approx(spherical_polygon_area(east), rel=1e-6)
        assert spherical_polygon_area(across) < 5_000.0

    def test_build_roof_selection(self):
        roof = build_roof_selection(SQUARE)
        assert roof.has_polygon
        assert roof.area_m2 > 0
        assert roof.usable_area_m2 == pytest.approx(roof.area_m2 * 0.7)
        assert roof.centroid.lat == pytest.approx(-23.50025)
        assert roof.centroid.lng == pytest.approx(-46.60025)
        assert roof.polygon == tuple(SQUARE)

    def test_degenerate_polygon(self):
        roof = build_roof_selection(SQUARE[:2])
        assert not roof.has_polygon
        assert roof.area_m2 == 0.0
        assert roof.usable_area_m2 == 0.0

    def test_empty_polygon_centroid(self):
        assert polygon_centroid([]) == LatLng(0.0, 0.0)
        roof = build_roof_selection([])
        assert roof.centroid == LatLng(0.0, 0.0)
        assert not roof.has_polygon

    def test_roof_selection_is_immutable(self):
        roof = build_roof_selection(SQUARE)
        with pytest.raises(AttributeError):
            roof.area_m2 = 1.0  # type: ignore[misc]
