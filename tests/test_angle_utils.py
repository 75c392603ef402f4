"""Tests for angle normalization and seam-safe interpolation."""

from __future__ import annotations

import math

import pytest

from cielo.angle_utils import (
    geojson_to_equatorial,
    interpolate_angle_deg,
    normalize_angle_deg,
    ra_hours_to_deg,
    wrap_longitude_deg,
)


@pytest.mark.parametrize(
    ("angle", "expected"),
    [(0.0, 0.0), (-30.0, 330.0), (360.0, 0.0), (725.0, 5.0), (-360.0, 0.0), (359.5, 359.5)],
)
def test_normalize_angle_range(angle: float, expected: float) -> None:
    """Any angle reduces into [0, 360)."""
    result = normalize_angle_deg(angle)
    assert 0.0 <= result < 360.0
    assert result == pytest.approx(expected)


def test_normalize_tiny_negative_stays_below_360() -> None:
    """A value just below zero never rounds to exactly 360."""
    assert normalize_angle_deg(-1e-15) < 360.0


def test_wrap_longitude() -> None:
    """Longitudes reduce into [-180, 180)."""
    assert wrap_longitude_deg(190.0) == pytest.approx(-170.0)
    assert wrap_longitude_deg(180.0) == pytest.approx(-180.0)
    assert wrap_longitude_deg(-181.0) == pytest.approx(179.0)
    assert wrap_longitude_deg(2.1734) == pytest.approx(2.1734)


def test_interpolate_crosses_north_seam() -> None:
    """350° → 10° passes through 0°, not 180°."""
    assert interpolate_angle_deg(350.0, 10.0, 0.5) == pytest.approx(0.0, abs=1e-9)
    assert interpolate_angle_deg(350.0, 10.0, 0.25) == pytest.approx(355.0)
    assert interpolate_angle_deg(10.0, 350.0, 0.25) == pytest.approx(5.0)


def test_interpolate_endpoints_are_exact() -> None:
    """t=0 and t=1 return the normalized endpoints."""
    assert interpolate_angle_deg(370.0, 20.0, 0.0) == pytest.approx(10.0)
    assert interpolate_angle_deg(370.0, 20.0, 1.0) == pytest.approx(20.0)


def test_interpolate_opposite_angles_turn_counterclockwise() -> None:
    """Half a turn apart, the difference is -180, never +180."""
    assert interpolate_angle_deg(0.0, 180.0, 0.5) == pytest.approx(270.0)
    assert interpolate_angle_deg(90.0, 270.0, 0.5) == pytest.approx(0.0, abs=1e-9)


def test_interpolate_ordinary_arc() -> None:
    """Without a seam, interpolation is plain linear."""
    assert interpolate_angle_deg(100.0, 160.0, 0.5) == pytest.approx(130.0)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_interpolate_non_finite_returns_start(bad: float) -> None:
    """A non-finite endpoint leaves the start angle unchanged."""
    assert interpolate_angle_deg(42.0, bad, 0.5) == 42.0


def test_ra_hours_to_degrees() -> None:
    """Right ascension hours scale by 15."""
    assert ra_hours_to_deg(18.6156) == pytest.approx(279.234)
    assert ra_hours_to_deg(24.0) == pytest.approx(0.0)


def test_geojson_longitude_becomes_right_ascension() -> None:
    """Negative GeoJSON longitudes map to RA above 180°."""
    assert geojson_to_equatorial(-90.0, 10.0) == pytest.approx((270.0, 10.0))
    assert geojson_to_equatorial(37.95, 89.26) == pytest.approx((37.95, 89.26))
