"""Projections from horizontal coordinates onto the normalized display plane.

Two policies share the [0, 100] plane:

- azimuthal equidistant (sky and Moon panels): zenith at the center, radius
  proportional to zenith distance, horizon on the unit circle.
- panel (Sun panels): azimuth mapped linearly across the width of a half-day
  window, altitude upward. Linear in azimuth, so 0°/360° is a seam.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from cielo.angle_utils import normalize_angle_deg
from cielo.models import HorizontalPoint, HourlySample, ProjectedPoint, ProjectionConfig

DEFAULT_PROJECTION = ProjectionConfig()
MOON_PROJECTION = ProjectionConfig(scale_x=48.0, scale_y=48.0)

# Radii this close to zero are the zenith; azimuth is undefined there.
_ZENITH_EPSILON = 1e-12


def azimuthal_project(
    point: HorizontalPoint, config: ProjectionConfig = DEFAULT_PROJECTION
) -> ProjectedPoint:
    """Azimuthal equidistant projection.

    ``r = (90 - alt) / 90`` is 0 at the zenith, 1 on the horizon and above 1
    below it. It is not clamped; callers filter below-horizon points.

    Args:
        point: Horizontal coordinates.
        config: Center and per-axis scale.

    Returns:
        ProjectedPoint with North up and East to the right of center.
    """
    az = math.radians(point.azimuth_deg)
    r = (90.0 - point.altitude_deg) / 90.0
    return ProjectedPoint(
        x=config.center_x + r * math.sin(az) * config.scale_x,
        y=config.center_y - r * math.cos(az) * config.scale_y,
    )


def azimuthal_unproject(
    point: ProjectedPoint, config: ProjectionConfig = DEFAULT_PROJECTION
) -> HorizontalPoint:
    """Inverse of :func:`azimuthal_project` for the same config.

    Azimuth is reported as 0 at the exact zenith.
    """
    u = (point.x - config.center_x) / config.scale_x  # r·sin(az)
    v = (config.center_y - point.y) / config.scale_y  # r·cos(az)
    r = math.hypot(u, v)
    altitude = 90.0 - r * 90.0
    if r < _ZENITH_EPSILON:
        return HorizontalPoint(azimuth_deg=0.0, altitude_deg=altitude)
    azimuth = normalize_angle_deg(math.degrees(math.atan2(u, v)))
    return HorizontalPoint(azimuth_deg=azimuth, altitude_deg=altitude)


@dataclass(frozen=True)
class AzimuthRange:
    """Azimuth extent and peak altitude of a body inside a panel window."""

    min_deg: float
    max_deg: float
    max_altitude_deg: float


def azimuth_range(
    samples: Iterable[HourlySample],
    window: tuple[float, float],
) -> AzimuthRange:
    """Azimuth extent of the visible samples inside ``window``.

    Falls back to the window itself with a 45° peak when nothing is visible.
    """
    start, end = window
    lo, hi, peak = math.inf, -math.inf, 0.0
    for s in samples:
        if not s.is_visible:
            continue
        if s.azimuth_deg < start or s.azimuth_deg > end:
            continue
        lo = min(lo, s.azimuth_deg)
        hi = max(hi, s.azimuth_deg)
        peak = max(peak, s.altitude_deg)
    if lo == math.inf:
        return AzimuthRange(min_deg=start, max_deg=end, max_altitude_deg=45.0)
    return AzimuthRange(min_deg=lo, max_deg=hi, max_altitude_deg=peak)


def panel_project(point: HorizontalPoint, az_range: AzimuthRange) -> ProjectedPoint:
    """Linear panel projection centred on the body's real azimuth range.

    Azimuth spans the width with a margin of 15% of the range (at least 5°)
    on each side; the peak altitude lands near the top of the panel.
    """
    span = az_range.max_deg - az_range.min_deg
    margin = max(span * 0.15, 5.0)
    range_min = az_range.min_deg - margin
    range_max = az_range.max_deg + margin
    x = (point.azimuth_deg - range_min) / (range_max - range_min) * 100.0

    # A non-positive peak would put the whole panel below the horizon line.
    alt_scale = min(max(az_range.max_altitude_deg, 1.0) * 1.3, 90.0)
    y = 90.0 - (point.altitude_deg / alt_scale) * 75.0
    return ProjectedPoint(x=x, y=y)
