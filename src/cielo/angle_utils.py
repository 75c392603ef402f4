"""Angle normalization, seam-safe interpolation, and coordinate unit helpers."""

import math


def normalize_angle_deg(angle: float) -> float:
    """Reduce any angle to [0, 360)."""
    a = math.fmod(angle, 360.0)
    if a < 0:
        a += 360.0
    # fmod of a tiny negative value can round back up to 360.0
    return 0.0 if a >= 360.0 else a


def wrap_longitude_deg(longitude: float) -> float:
    """Reduce a longitude to [-180, 180)."""
    return normalize_angle_deg(longitude + 180.0) - 180.0


def interpolate_angle_deg(start: float, end: float, t: float) -> float:
    """Interpolate between two angles along the shorter arc.

    ``delta`` is the signed shortest difference in [-180, 180), so a path from
    350° to 10° crosses 0° instead of sweeping back through 180°.

    Args:
        start: Angle at t=0 (degrees).
        end: Angle at t=1 (degrees).
        t: Interpolation fraction, normally in [0, 1].

    Returns:
        Interpolated angle in [0, 360), or ``start`` unchanged when either
        endpoint is not finite.
    """
    if not (math.isfinite(start) and math.isfinite(end)):
        return start
    if t == 0:
        return normalize_angle_deg(start)
    if t == 1:
        return normalize_angle_deg(end)
    delta = normalize_angle_deg(end - start + 540.0) - 180.0
    return normalize_angle_deg(start + delta * t)


def ra_hours_to_deg(ra_hours: float) -> float:
    """Right ascension in hours → degrees in [0, 360)."""
    return normalize_angle_deg(ra_hours * 15.0)


def geojson_to_equatorial(lon: float, lat: float) -> tuple[float, float]:
    """GeoJSON sky coordinates (RA as longitude in [-180, 180)) → (ra_deg, dec_deg)."""
    ra = lon + 360.0 if lon < 0 else lon
    return normalize_angle_deg(ra), lat
