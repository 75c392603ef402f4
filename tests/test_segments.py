"""Tests for visibility and wrap-around segmentation."""

from __future__ import annotations

from cielo.models import HorizontalPoint, ProjectedPoint
from cielo.projection import AzimuthRange, panel_project
from cielo.segments import has_gap, is_visible, split_at_gaps, to_svg_path


def test_horizon_is_not_visible() -> None:
    """Altitude exactly 0 is below the horizon."""
    assert not is_visible(HorizontalPoint(azimuth_deg=10.0, altitude_deg=0.0))
    assert is_visible(HorizontalPoint(azimuth_deg=10.0, altitude_deg=0.01))
    assert not is_visible(HorizontalPoint(azimuth_deg=10.0, altitude_deg=-5.0))


def test_split_empty_and_single() -> None:
    """Empty input has no sub-paths; a lone point is its own sub-path."""
    assert split_at_gaps([]) == []
    only = ProjectedPoint(10.0, 10.0)
    assert split_at_gaps([only]) == [[only]]


def test_split_across_panel_seam() -> None:
    """A track crossing 0° azimuth on a linear panel breaks at the seam."""
    az_range = AzimuthRange(min_deg=0.0, max_deg=360.0, max_altitude_deg=45.0)
    points = [
        panel_project(HorizontalPoint(azimuth_deg=az, altitude_deg=10.0), az_range)
        for az in (350.0, 355.0, 359.9, 0.1, 5.0)
    ]
    subpaths = split_at_gaps(points, 40.0)
    assert [len(s) for s in subpaths] == [3, 2]
    assert subpaths[0][-1] == points[2]
    assert subpaths[1][0] == points[3]


def test_two_points_across_seam_are_never_joined() -> None:
    """0.1° and 359.9° near the horizon become two single-point sub-paths."""
    az_range = AzimuthRange(min_deg=0.0, max_deg=360.0, max_altitude_deg=45.0)
    a = panel_project(HorizontalPoint(azimuth_deg=0.1, altitude_deg=1.0), az_range)
    b = panel_project(HorizontalPoint(azimuth_deg=359.9, altitude_deg=1.0), az_range)
    assert split_at_gaps([a, b], 40.0) == [[a], [b]]
    assert has_gap([a, b], 40.0)


def test_split_keeps_order_and_single_point_pieces() -> None:
    """Every point survives, in order, including isolated ones."""
    points = [
        ProjectedPoint(0.0, 0.0),
        ProjectedPoint(10.0, 0.0),
        ProjectedPoint(90.0, 0.0),
        ProjectedPoint(0.0, 90.0),
        ProjectedPoint(5.0, 90.0),
    ]
    subpaths = split_at_gaps(points, 40.0)
    assert [len(s) for s in subpaths] == [2, 1, 2]
    assert [p for s in subpaths for p in s] == points


def test_threshold_is_exclusive() -> None:
    """A step exactly equal to the threshold stays connected."""
    points = [ProjectedPoint(0.0, 0.0), ProjectedPoint(40.0, 0.0)]
    assert not has_gap(points, 40.0)
    assert has_gap(points, 39.9)
    assert len(split_at_gaps(points, 40.0)) == 1


def test_svg_path_restarts_each_subpath() -> None:
    """Each sub-path opens with its own move command."""
    path = to_svg_path(
        [
            [ProjectedPoint(1.0, 2.0), ProjectedPoint(3.0, 4.0)],
            [ProjectedPoint(90.0, 2.5)],
        ]
    )
    assert path == "M 1.000 2.000 L 3.000 4.000 M 90.000 2.500"
    assert to_svg_path([]) == ""
