"""Configuration: observer, data paths and engine knobs from environment variables.

Entry points call ``load_dotenv()`` first, so a ``.env`` file in the working
directory can set any of these.
"""

import logging
import math
import os
from pathlib import Path

from cielo.models import FilterConfig, Observer, ProjectionConfig

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "data"
DEFAULT_LOCATION = "barcelona"
DEFAULT_LATITUDE = 41.3851
DEFAULT_LONGITUDE = 2.1734
DEFAULT_TIMEZONE = "Europe/Madrid"
DEFAULT_STAR_MAG_LIMIT = 6.0
DEFAULT_PROJECTION_SCALE = 50.0
DEFAULT_GAP_THRESHOLD = 40.0
DEFAULT_STAR_RA_UNIT = "degrees"


def _get_float(name: str, default: float, positive: bool = False) -> float:
    """Read a numeric variable, falling back to ``default`` on bad values."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using %s", name, raw, default)
        return default
    if not math.isfinite(value) or (positive and value <= 0):
        logger.warning("%s=%r is out of range; using %s", name, raw, default)
        return default
    return value


def get_data_dir() -> Path:
    """Return the generator's output directory (CIELO_DATA_DIR or default)."""
    return Path(os.environ.get("CIELO_DATA_DIR", DEFAULT_DATA_DIR))


def get_location() -> str:
    """Return the location key used in data file names (CIELO_LOCATION)."""
    return os.environ.get("CIELO_LOCATION", DEFAULT_LOCATION)


def get_timezone() -> str:
    """Return the observer's IANA time zone (CIELO_TIMEZONE)."""
    return os.environ.get("CIELO_TIMEZONE", DEFAULT_TIMEZONE)


def get_star_ra_unit() -> str:
    """Return the catalog RA unit, "degrees" or "hours" (CIELO_STAR_RA_UNIT)."""
    unit = os.environ.get("CIELO_STAR_RA_UNIT", "").strip().lower() or DEFAULT_STAR_RA_UNIT
    if unit not in ("degrees", "hours"):
        logger.warning(
            "CIELO_STAR_RA_UNIT=%r is not degrees or hours; using %s", unit, DEFAULT_STAR_RA_UNIT
        )
        return DEFAULT_STAR_RA_UNIT
    return unit


def get_observer() -> Observer:
    """Return the configured observer (CIELO_LATITUDE, CIELO_LONGITUDE).

    A latitude outside [-90, 90] falls back to the default.
    """
    lat = _get_float("CIELO_LATITUDE", DEFAULT_LATITUDE)
    if not -90.0 <= lat <= 90.0:
        logger.warning("CIELO_LATITUDE=%s is out of range; using %s", lat, DEFAULT_LATITUDE)
        lat = DEFAULT_LATITUDE
    lon = _get_float("CIELO_LONGITUDE", DEFAULT_LONGITUDE)
    return Observer(latitude_deg=lat, longitude_deg=lon, name=get_location())


def get_filter_config() -> FilterConfig:
    """Return magnitude cutoff and gap threshold (CIELO_STAR_MAG_LIMIT, CIELO_GAP_THRESHOLD)."""
    return FilterConfig(
        magnitude_limit=_get_float("CIELO_STAR_MAG_LIMIT", DEFAULT_STAR_MAG_LIMIT),
        gap_threshold=_get_float(
            "CIELO_GAP_THRESHOLD", DEFAULT_GAP_THRESHOLD, positive=True
        ),
    )


def get_projection_config() -> ProjectionConfig:
    """Return the sky projection (CIELO_PROJECTION_SCALE, or per-axis _X/_Y overrides)."""
    scale = _get_float("CIELO_PROJECTION_SCALE", DEFAULT_PROJECTION_SCALE, positive=True)
    return ProjectionConfig(
        scale_x=_get_float("CIELO_PROJECTION_SCALE_X", scale, positive=True),
        scale_y=_get_float("CIELO_PROJECTION_SCALE_Y", scale, positive=True),
    )
