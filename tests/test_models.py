"""Tests for observer validation and antipode derivation."""

from __future__ import annotations

import pytest

from cielo.models import Hemisphere, Observer


def test_latitude_is_validated() -> None:
    """Latitudes beyond the poles are rejected."""
    with pytest.raises(ValueError):
        Observer(latitude_deg=90.5, longitude_deg=0.0)


def test_longitude_is_wrapped_on_use() -> None:
    """Longitudes are kept as given and wrapped when read."""
    observer = Observer(latitude_deg=10.0, longitude_deg=200.0)
    assert observer.longitude_deg == 200.0
    assert observer.wrapped_longitude_deg == pytest.approx(-160.0)


def test_hemisphere() -> None:
    """The equator counts as north."""
    assert Observer(0.0, 0.0).hemisphere is Hemisphere.NORTH
    assert Observer(-0.1, 0.0).hemisphere is Hemisphere.SOUTH


def test_antipode() -> None:
    """The antipode flips latitude and moves longitude by 180°."""
    barcelona = Observer(latitude_deg=41.3851, longitude_deg=2.1734, name="barcelona")
    antipode = barcelona.antipode()
    assert antipode.latitude_deg == pytest.approx(-41.3851)
    assert antipode.longitude_deg == pytest.approx(-177.8266)
    assert antipode.name == "barcelona antipode"
    assert antipode.hemisphere is Hemisphere.SOUTH
    assert barcelona.antipode("Pacific").name == "Pacific"
