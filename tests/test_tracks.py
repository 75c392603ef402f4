"""Tests for hourly-track sampling, interpolation and the Sun/Moon panels."""

from __future__ import annotations

from datetime import datetime

import pytest

from cielo.models import (
    HorizontalPoint,
    HourlySample,
    MoonDailyRecord,
    ProjectedPoint,
    SunDailyRecord,
)
from cielo.tracks import (
    DAY_VIEWS,
    NIGHT_VIEWS,
    DayHalf,
    View,
    interpolate_position,
    is_daytime,
    moon_panel,
    sample_path,
    sun_panel,
    views_for,
    visible_track,
)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 15, hour, minute)


def _identity(h: HorizontalPoint) -> ProjectedPoint:
    return ProjectedPoint(x=h.azimuth_deg, y=h.altitude_deg)


def test_interpolation_wraps_to_hour_zero() -> None:
    """23:30 interpolates toward the hour-0 sample across the 0° seam."""
    samples = [
        HourlySample(hour=23, azimuth_deg=350.0, altitude_deg=10.0, is_visible=True),
        HourlySample(hour=0, azimuth_deg=10.0, altitude_deg=20.0, is_visible=True),
    ]
    pos = interpolate_position(samples, _at(23, 30))
    assert pos is not None
    assert pos.azimuth_deg == pytest.approx(0.0, abs=1e-9)
    assert pos.altitude_deg == pytest.approx(15.0)
    assert pos.is_visible


def test_interpolation_missing_current_hour() -> None:
    """No sample for the current hour means no position."""
    samples = [HourlySample(hour=4, azimuth_deg=90.0, altitude_deg=5.0, is_visible=True)]
    assert interpolate_position(samples, _at(5, 10)) is None


def test_interpolation_missing_next_hour_returns_current() -> None:
    """Without a following sample the current one is returned verbatim."""
    samples = [HourlySample(hour=5, azimuth_deg=100.0, altitude_deg=-3.0, is_visible=False)]
    pos = interpolate_position(samples, _at(5, 45))
    assert pos is not None
    assert (pos.azimuth_deg, pos.altitude_deg) == (100.0, -3.0)
    assert not pos.is_visible


def test_interpolated_visibility_follows_altitude() -> None:
    """Visibility is recomputed from the interpolated altitude."""
    samples = [
        HourlySample(hour=7, azimuth_deg=110.0, altitude_deg=-5.0, is_visible=False),
        HourlySample(hour=8, azimuth_deg=120.0, altitude_deg=5.0, is_visible=True),
    ]
    early = interpolate_position(samples, _at(7, 15))
    late = interpolate_position(samples, _at(7, 45))
    assert early is not None and late is not None
    assert early.altitude_deg == pytest.approx(-2.5)
    assert not early.is_visible
    assert late.altitude_deg == pytest.approx(2.5)
    assert late.azimuth_deg == pytest.approx(117.5)
    assert late.is_visible


def test_sample_path_runs_past_midnight() -> None:
    """An end hour before the start wraps through hour 0, one point per sample."""
    samples = [
        HourlySample(hour=h, azimuth_deg=h * 10.0, altitude_deg=10.0, is_visible=True)
        for h in range(24)
    ]
    path = sample_path(samples, 22.0, 2.0, _identity, gap_threshold=1000.0)
    assert len(path) == 1
    assert [p.x for p in path[0]] == [220.0, 230.0, 0.0, 10.0, 20.0]


def test_sample_path_skips_hidden_and_out_of_window() -> None:
    """Invisible samples and samples outside the azimuth window are skipped."""
    samples = [
        HourlySample(hour=6, azimuth_deg=90.0, altitude_deg=-1.0, is_visible=False),
        HourlySample(hour=7, azimuth_deg=100.0, altitude_deg=10.0, is_visible=True),
        HourlySample(hour=8, azimuth_deg=120.0, altitude_deg=20.0, is_visible=True),
        HourlySample(hour=9, azimuth_deg=190.0, altitude_deg=25.0, is_visible=True),
    ]
    path = sample_path(
        samples, 6.0, 9.5, _identity, azimuth_window=(0.0, 180.0), gap_threshold=1000.0
    )
    assert [[p.x for p in s] for s in path] == [[100.0, 120.0]]


def test_sample_path_needs_two_points() -> None:
    """A single surviving sample draws nothing."""
    samples = [HourlySample(hour=7, azimuth_deg=100.0, altitude_deg=10.0, is_visible=True)]
    assert sample_path(samples, 7.0, 7.5, _identity) == []


def test_is_daytime_bounds(sun_record: SunDailyRecord) -> None:
    """Sunrise is inclusive, sunset exclusive."""
    assert is_daytime(sun_record, _at(6, 30))
    assert is_daytime(sun_record, _at(12))
    assert not is_daytime(sun_record, _at(17, 30))
    assert not is_daytime(sun_record, _at(3))


def test_morning_panel(sun_record: SunDailyRecord) -> None:
    """The morning panel covers sunrise to noon in the eastern sky."""
    panel = sun_panel(sun_record, _at(10), DayHalf.MORNING)
    assert panel.azimuth_range.min_deg == pytest.approx(105.0)
    assert panel.azimuth_range.max_deg == pytest.approx(180.0)
    assert panel.azimuth_range.max_altitude_deg == pytest.approx(60.0)
    assert panel.horizon_y == pytest.approx(90.0)
    assert (panel.start_clock, panel.end_clock) == ("06:30", "12:00")
    assert (panel.start_azimuth_deg, panel.end_azimuth_deg) == (97.5, 180.0)
    assert panel.noon_altitude_deg == 60.0
    assert len(panel.path) == 1
    assert len(panel.path[0]) == 6
    assert panel.marker is not None
    assert 0.0 < panel.marker.x < 100.0
    assert panel.marker.y < panel.horizon_y


def test_marker_only_inside_time_window(sun_record: SunDailyRecord) -> None:
    """At 10:00 the Sun belongs to the morning panel, at 14:00 to the afternoon one."""
    assert sun_panel(sun_record, _at(10), DayHalf.AFTERNOON).marker is None
    afternoon = sun_panel(sun_record, _at(14), DayHalf.AFTERNOON)
    assert afternoon.marker is not None
    assert afternoon.position is not None
    assert afternoon.position.azimuth_deg == pytest.approx(210.0)
    assert sun_panel(sun_record, _at(14), DayHalf.MORNING).marker is None


def test_no_marker_at_night(sun_record: SunDailyRecord) -> None:
    """Below the horizon the Sun has a position but no marker."""
    panel = sun_panel(sun_record, _at(22), DayHalf.AFTERNOON)
    assert panel.position is not None
    assert not panel.position.is_visible
    assert panel.marker is None


def test_moon_track_splits_across_the_day(moon_record: MoonDailyRecord) -> None:
    """Evening and after-midnight samples are separate sub-paths."""
    panel = moon_panel(moon_record, _at(23, 30))
    assert [len(s) for s in panel.path] == [6, 5]
    assert panel.position is not None
    assert panel.position.azimuth_deg == pytest.approx(172.5)
    assert panel.marker is not None
    assert panel.phase.key == "waxing_crescent"
    assert (panel.moonrise, panel.moonset) == ("18:00", None)


def test_moon_marker_hidden_by_day(moon_record: MoonDailyRecord) -> None:
    """The Moon is below the horizon at noon and gets no marker."""
    panel = moon_panel(moon_record, _at(12))
    assert panel.position is not None
    assert panel.marker is None


def test_visible_track_uses_hour_order() -> None:
    """Samples are connected in hour order regardless of input order."""
    samples = [
        HourlySample(hour=2, azimuth_deg=30.0, altitude_deg=20.0, is_visible=True),
        HourlySample(hour=0, azimuth_deg=10.0, altitude_deg=20.0, is_visible=True),
        HourlySample(hour=1, azimuth_deg=20.0, altitude_deg=20.0, is_visible=True),
    ]
    path = visible_track(samples, _identity, gap_threshold=1000.0)
    assert [p.x for p in path[0]] == [10.0, 20.0, 30.0]


def test_interpolation_reaches_horizon_at_half_past_eleven() -> None:
    """-5° at 23:00 and 5° at 00:00 meet the horizon at 23:30."""
    samples = [
        HourlySample(hour=23, azimuth_deg=300.0, altitude_deg=-5.0, is_visible=False),
        HourlySample(hour=0, azimuth_deg=310.0, altitude_deg=5.0, is_visible=True),
    ]
    pos = interpolate_position(samples, _at(23, 30))
    assert pos is not None
    assert pos.altitude_deg == pytest.approx(0.0, abs=1e-9)
    assert pos.azimuth_deg == pytest.approx(305.0)
    assert not pos.is_visible


@pytest.mark.parametrize(
    ("hour", "minute", "expected"),
    [(6, 29, NIGHT_VIEWS), (6, 30, DAY_VIEWS), (17, 29, DAY_VIEWS), (17, 30, NIGHT_VIEWS)],
)
def test_views_switch_at_sunrise_and_sunset(
    sun_record: SunDailyRecord, hour: int, minute: int, expected: tuple[View, ...]
) -> None:
    """Day shows the Sun and the antipodal sky; night the local sky and the Moon."""
    assert views_for(sun_record, _at(hour, minute)) == expected


def test_day_and_night_views() -> None:
    """Only the daytime sky is drawn over the antipode."""
    assert [(v.panel, v.antipode) for v in DAY_VIEWS] == [
        ("sky", True), ("sun-east", False), ("sun-west", False)
    ]
    assert [(v.panel, v.antipode) for v in NIGHT_VIEWS] == [
        ("sky", False), ("moon-phase", False), ("moon", False)
    ]


def test_afternoon_panel_event_azimuths(sun_record: SunDailyRecord) -> None:
    """The afternoon panel runs from the noon azimuth to the sunset azimuth."""
    panel = sun_panel(sun_record, _at(14), DayHalf.AFTERNOON)
    assert (panel.start_azimuth_deg, panel.end_azimuth_deg) == (180.0, 262.5)


def test_moon_illumination_from_phase_when_unrecorded() -> None:
    """Without a recorded illumination the percentage follows the phase."""
    moon = MoonDailyRecord(date="2025-01-15", phase=0.25, illumination=None, hourly=())
    assert moon_panel(moon, _at(12)).illumination == pytest.approx(50.0)
    recorded = MoonDailyRecord(date="2025-01-15", phase=0.25, illumination=48.0, hourly=())
    assert moon_panel(recorded, _at(12)).illumination == 48.0
