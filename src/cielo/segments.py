"""Visibility predicate and wrap-around segmentation of projected polylines.

Two points adjacent on the sky can land far apart on the plane when they
straddle a projection seam. Connecting them draws a chord across the whole
chart, so consecutive points further apart than a threshold are never joined.
"""

import math
from collections.abc import Sequence

from cielo.models import HorizontalPoint, ProjectedPoint

DEFAULT_GAP_THRESHOLD = 40.0


def is_visible(point: HorizontalPoint) -> bool:
    """Strictly above the horizon. Altitude exactly 0 is not visible."""
    return point.altitude_deg > 0


def distance(a: ProjectedPoint, b: ProjectedPoint) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def has_gap(
    points: Sequence[ProjectedPoint], threshold: float = DEFAULT_GAP_THRESHOLD
) -> bool:
    """True when any two consecutive points are further apart than ``threshold``."""
    return any(
        distance(points[i - 1], points[i]) > threshold for i in range(1, len(points))
    )


def split_at_gaps(
    points: Sequence[ProjectedPoint], threshold: float = DEFAULT_GAP_THRESHOLD
) -> list[list[ProjectedPoint]]:
    """Split an ordered point sequence into sub-paths at every gap.

    Args:
        points: Ordered projected points meant to form one polyline.
        threshold: Largest distance still drawn as a connecting segment.

    Returns:
        Sub-paths in input order. Single-point sub-paths are kept; an empty
        input yields an empty list.
    """
    subpaths: list[list[ProjectedPoint]] = []
    current: list[ProjectedPoint] = []
    for point in points:
        if current and distance(current[-1], point) > threshold:
            subpaths.append(current)
            current = []
        current.append(point)
    if current:
        subpaths.append(current)
    return subpaths


def to_svg_path(subpaths: Sequence[Sequence[ProjectedPoint]], precision: int = 3) -> str:
    """SVG path data with one ``M`` per sub-path (``"M x y L x y M x y"``)."""
    parts: list[str] = []
    for subpath in subpaths:
        for i, p in enumerate(subpath):
            cmd = "M" if i == 0 else "L"
            parts.append(f"{cmd} {p.x:.{precision}f} {p.y:.{precision}f}")
    return " ".join(parts)
