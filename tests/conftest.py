"""Shared fixtures: synthetic generator output for one day in Barcelona."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import pytest

from cielo.catalog import parse_moon_records, parse_sun_records
from cielo.models import MoonDailyRecord, SunDailyRecord

DAY = "2025-01-15"


def _sun_hourly() -> list[dict[str, Any]]:
    # Rises due east at 06:00, culminates due south at 60° at noon, sets due west.
    rows = []
    for hour in range(24):
        altitude = round(60.0 * math.sin(math.pi * (hour - 6) / 12), 6)
        rows.append(
            {
                "hour": hour,
                "azimuth": (hour * 15.0) % 360.0,
                "altitude": altitude,
                "isVisible": altitude > 0,
            }
        )
    return rows


def _moon_hourly() -> list[dict[str, Any]]:
    # Up from 18:00 to 06:00, due south at 40° at midnight.
    rows = []
    for hour in range(24):
        altitude = round(40.0 * math.cos(math.pi * hour / 12), 6)
        rows.append(
            {
                "hour": hour,
                "azimuth": (hour * 15.0 + 180.0) % 360.0,
                "altitude": altitude,
                "isVisible": altitude > 0,
            }
        )
    return rows


@pytest.fixture
def sun_json() -> list[dict[str, Any]]:
    return [
        {
            "date": DAY,
            "sunrise": "06:30",
            "sunset": "17:30",
            "solarNoon": "12:00",
            "azimuthSunrise": 97.5,
            "azimuthSunset": 262.5,
            "azimuthNoon": 180.0,
            "altitudeNoon": 60.0,
            "hourlyData": _sun_hourly(),
        }
    ]


@pytest.fixture
def moon_json() -> list[dict[str, Any]]:
    return [
        {
            "date": DAY,
            "phase": 0.1,
            "phaseName": "Creciente",
            "illumination": 9,
            "moonrise": "18:00",
            "moonset": None,
            "hourlyData": _moon_hourly(),
        }
    ]


@pytest.fixture
def stars_json() -> list[dict[str, Any]]:
    return [
        {"name": "Vega", "ra": 279.234, "dec": 38.78, "mag": 0.03},
        {"name": "Polaris", "ra": 37.95, "dec": 89.26, "mag": 1.98},
        {"name": "Sirius", "ra": 101.287, "dec": -16.716, "mag": -1.46},
        {"name": None, "ra": 10.0, "dec": 60.0, "mag": 7.5},
    ]


@pytest.fixture
def lines_json() -> dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": "UMi",
                "properties": {"name": "Ursa Minor"},
                "geometry": {
                    "type": "MultiLineString",
                    "coordinates": [[[37.95, 89.26], [-96.0, 86.6], [-123.0, 82.0]]],
                },
            }
        ],
    }


@pytest.fixture
def sun_record(sun_json: list[dict[str, Any]]) -> SunDailyRecord:
    return parse_sun_records(sun_json)[0]


@pytest.fixture
def moon_record(moon_json: list[dict[str, Any]]) -> MoonDailyRecord:
    return parse_moon_records(moon_json)[0]


@pytest.fixture
def data_dir(
    tmp_path: Path,
    sun_json: list[dict[str, Any]],
    moon_json: list[dict[str, Any]],
    stars_json: list[dict[str, Any]],
    lines_json: dict[str, Any],
) -> Path:
    """Data directory laid out the way the ephemeris generator writes it."""
    root = tmp_path / "data"
    files = {
        root / "sun" / "barcelona.json": sun_json,
        root / "moon" / "barcelona.json": moon_json,
        root / "stars" / "catalog.json": stars_json,
        root / "constellations-lines.json": lines_json,
    }
    for path, payload in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
    return root


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every CIELO_* variable so configuration uses its defaults."""
    for name in (
        "CIELO_DATA_DIR",
        "CIELO_LOCATION",
        "CIELO_LATITUDE",
        "CIELO_LONGITUDE",
        "CIELO_TIMEZONE",
        "CIELO_STAR_MAG_LIMIT",
        "CIELO_STAR_RA_UNIT",
        "CIELO_GAP_THRESHOLD",
        "CIELO_PROJECTION_SCALE",
        "CIELO_PROJECTION_SCALE_X",
        "CIELO_PROJECTION_SCALE_Y",
        "CIELO_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
