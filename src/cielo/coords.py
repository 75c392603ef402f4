"""Equatorial → horizontal coordinate transform."""

import math
from datetime import datetime

from cielo.angle_utils import normalize_angle_deg
from cielo.models import EquatorialPoint, HorizontalPoint, Observer
from cielo.time_utils import local_sidereal_time_deg

# Below this the azimuth denominator cos(lat)·cos(alt) is treated as zero.
_AZIMUTH_EPSILON = 1e-12


def _clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


def horizontal_from_sidereal(
    ra_deg: float,
    dec_deg: float,
    latitude_deg: float,
    lst_deg: float,
) -> HorizontalPoint:
    """Azimuth/altitude for a precomputed local sidereal time.

    Lets a batch of stars share one sidereal time computation.

    Args:
        ra_deg: Right ascension (degrees).
        dec_deg: Declination (degrees).
        latitude_deg: Observer latitude (degrees).
        lst_deg: Local sidereal time (degrees).

    Returns:
        HorizontalPoint with azimuth in [0, 360) measured North through East.
        Azimuth is 0 when undefined (polar observer, object at zenith/nadir).
    """
    lat = math.radians(latitude_deg)
    dec = math.radians(dec_deg)
    ha = math.radians(lst_deg - ra_deg)

    sin_alt = _clamp_unit(
        math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(ha)
    )
    alt = math.asin(sin_alt)

    denominator = math.cos(lat) * math.cos(alt)
    if abs(denominator) < _AZIMUTH_EPSILON:
        azimuth = 0.0
    else:
        cos_az = (math.sin(dec) - math.sin(lat) * sin_alt) / denominator
        azimuth = math.degrees(math.acos(_clamp_unit(cos_az)))
        if math.sin(ha) > 0:
            azimuth = 360.0 - azimuth

    altitude = max(-90.0, min(90.0, math.degrees(alt)))
    return HorizontalPoint(
        azimuth_deg=normalize_angle_deg(azimuth), altitude_deg=altitude
    )


def equatorial_to_horizontal(
    point: EquatorialPoint,
    observer: Observer,
    instant: datetime,
) -> HorizontalPoint:
    """Convert RA/Dec to azimuth/altitude for an observer at an instant.

    Uses the low-precision sidereal time of ``time_utils``; no refraction or
    parallax correction is applied.
    """
    lst = local_sidereal_time_deg(instant, observer.wrapped_longitude_deg)
    return horizontal_from_sidereal(
        point.ra_deg, point.dec_deg, observer.latitude_deg, lst
    )
