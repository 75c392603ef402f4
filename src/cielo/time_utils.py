"""Sidereal time and civil-clock helpers."""

from datetime import date, datetime

from pytz import timezone, utc

from cielo.angle_utils import normalize_angle_deg

J2000 = datetime(2000, 1, 1, 12, 0, tzinfo=utc)
SECONDS_PER_DAY = 86400.0

# Linear GMST polynomial (degrees). Low precision, no nutation/precession.
GMST_AT_J2000_DEG = 280.46061837
GMST_RATE_DEG_PER_DAY = 360.98564736629


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return utc.localize(instant)
    return instant.astimezone(utc)


def days_since_epoch(instant: datetime) -> float:
    """Fractional days since 2000-01-01T12:00 UTC. Naive datetimes are UTC."""
    return (_as_utc(instant) - J2000).total_seconds() / SECONDS_PER_DAY


def local_sidereal_time_deg(instant: datetime, longitude_deg: float) -> float:
    """Local mean sidereal time in degrees [0, 360).

    Args:
        instant: Point in time (aware, or naive UTC).
        longitude_deg: Observer longitude, East positive.

    Returns:
        GMST from the linear polynomial plus longitude, reduced mod 360.
    """
    days = days_since_epoch(instant)
    gmst = GMST_AT_J2000_DEG + GMST_RATE_DEG_PER_DAY * days
    return normalize_angle_deg(gmst + longitude_deg)


def parse_clock(value: str) -> float:
    """Parse "HH:MM" into fractional hours (``"06:45"`` → 6.75).

    Raises:
        ValueError: When the string is not two colon-separated integers.
    """
    parts = value.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"invalid clock string: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 24 and 0 <= minutes < 60):
        raise ValueError(f"invalid clock string: {value!r}")
    return hours + minutes / 60.0


def clock_hours(instant: datetime) -> float:
    """Civil wall-clock time of ``instant`` as fractional hours."""
    return instant.hour + instant.minute / 60.0


def hour_fraction(instant: datetime) -> float:
    """Elapsed fraction of the current civil hour, in [0, 1)."""
    return (instant.minute + instant.second / 60.0) / 60.0


def format_clock(instant: datetime) -> str:
    return f"{instant.hour:02d}:{instant.minute:02d}"


def civil_instant(when: str | datetime, tz_name: str) -> datetime:
    """Attach the observer's time zone to a wall-clock time.

    Args:
        when: Naive datetime or "YYYY-MM-DD HH:MM" string in local civil time.
            Aware datetimes are converted to ``tz_name``.
        tz_name: IANA time zone name ("Europe/Madrid").

    Returns:
        Timezone-aware datetime in ``tz_name``.
    """
    local_tz = timezone(tz_name)
    if isinstance(when, str):
        when = datetime.strptime(when, "%Y-%m-%d %H:%M")
    if when.tzinfo is not None:
        return when.astimezone(local_tz)
    return local_tz.localize(when)


def date_key(instant: datetime | date) -> str:
    """Daily-record lookup key ("YYYY-MM-DD") of the civil date."""
    return instant.strftime("%Y-%m-%d")
