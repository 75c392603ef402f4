"""Sun/Moon tracks from hourly samples: path sampling and current-position interpolation."""

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import partial

from cielo.angle_utils import interpolate_angle_deg
from cielo.models import (
    FilterConfig,
    HorizontalPoint,
    HourlySample,
    MoonDailyRecord,
    ProjectedPoint,
    ProjectionConfig,
    SunDailyRecord,
    TrackPosition,
)
from cielo.moon_phase import MoonPhaseInfo, classify_phase, illuminated_fraction
from cielo.projection import (
    MOON_PROJECTION,
    AzimuthRange,
    azimuth_range,
    azimuthal_project,
    panel_project,
)
from cielo.segments import DEFAULT_GAP_THRESHOLD, split_at_gaps
from cielo.time_utils import clock_hours, hour_fraction, parse_clock

logger = logging.getLogger(__name__)

Projector = Callable[[HorizontalPoint], ProjectedPoint]
SubPaths = list[list[ProjectedPoint]]

DEFAULT_PATH_STEPS = 50


class DayHalf(Enum):
    """Half of the Sun's daily arc and the azimuth window it is drawn in."""

    MORNING = (0.0, 180.0)  # sunrise → solar noon, eastern sky
    AFTERNOON = (180.0, 360.0)  # solar noon → sunset, western sky

    @property
    def window(self) -> tuple[float, float]:
        return self.value


@dataclass(frozen=True)
class SunPanel:
    """Everything a renderer needs to draw one half of the Sun's day."""

    half: DayHalf
    path: tuple[tuple[ProjectedPoint, ...], ...]
    azimuth_range: AzimuthRange
    horizon_y: float
    position: TrackPosition | None  # Interpolated position, None when no sample
    marker: ProjectedPoint | None  # Set only when the Sun is up inside this panel
    start_clock: str
    end_clock: str
    start_azimuth_deg: float | None = None  # Recorded azimuth of the opening event
    end_azimuth_deg: float | None = None
    noon_altitude_deg: float | None = None


@dataclass(frozen=True)
class MoonPanel:
    """Moon position chart: night path, current marker and phase."""

    path: tuple[tuple[ProjectedPoint, ...], ...]
    position: TrackPosition | None
    marker: ProjectedPoint | None
    phase: MoonPhaseInfo
    illumination: float  # Percent; derived from the phase when not recorded
    moonrise: str | None
    moonset: str | None


def hourly_lookup(samples: Iterable[HourlySample]) -> dict[int, HourlySample]:
    """Index samples by civil hour (0..23). Later duplicates win."""
    return {int(round(s.hour)) % 24: s for s in samples}


def _horizontal(sample: HourlySample) -> HorizontalPoint:
    return HorizontalPoint(
        azimuth_deg=sample.azimuth_deg, altitude_deg=sample.altitude_deg
    )


def sample_path(
    samples: Iterable[HourlySample],
    start_hour: float,
    end_hour: float,
    project: Projector,
    *,
    azimuth_window: tuple[float, float] = (0.0, 360.0),
    steps: int = DEFAULT_PATH_STEPS,
    gap_threshold: float = DEFAULT_GAP_THRESHOLD,
) -> SubPaths:
    """Sample a body's path between two civil hours.

    Walks ``steps + 1`` evenly spaced virtual hours from ``start_hour`` to
    ``end_hour`` (an end before the start runs past midnight) and matches
    each one to the sample of hour ``floor(h) mod 24``.

    Args:
        samples: The day's hourly samples.
        start_hour: Fractional civil hour where the path starts.
        end_hour: Fractional civil hour where the path ends.
        project: Maps horizontal coordinates onto the plane.
        azimuth_window: Inclusive azimuth bounds; samples outside are skipped.
        steps: Number of intervals between start and end.
        gap_threshold: Distance above which consecutive points are not joined.

    Returns:
        Gap-split sub-paths, or an empty list when fewer than two samples
        survive.
    """
    lookup = hourly_lookup(samples)
    if end_hour < start_hour:
        end_hour += 24.0
    lo, hi = azimuth_window

    points: list[ProjectedPoint] = []
    previous: HourlySample | None = None
    for i in range(steps + 1):
        hour = start_hour + (end_hour - start_hour) * i / steps
        sample = lookup.get(math.floor(hour) % 24)
        if sample is None or sample is previous:
            continue
        previous = sample
        if not sample.is_visible:
            continue
        if sample.azimuth_deg < lo or sample.azimuth_deg > hi:
            continue
        points.append(project(_horizontal(sample)))

    if len(points) < 2:
        return []
    return split_at_gaps(points, gap_threshold)


def visible_track(
    samples: Iterable[HourlySample],
    project: Projector,
    gap_threshold: float = DEFAULT_GAP_THRESHOLD,
) -> SubPaths:
    """Path through every visible sample of the day, in hour order."""
    points = [
        project(_horizontal(s))
        for s in sorted(samples, key=lambda s: s.hour)
        if s.is_visible and s.altitude_deg >= 0
    ]
    if len(points) < 2:
        return []
    return split_at_gaps(points, gap_threshold)


def interpolate_position(
    samples: Iterable[HourlySample], instant: datetime
) -> TrackPosition | None:
    """Position of a body at ``instant`` from the bounding hourly samples.

    The next sample is hour ``(h + 1) mod 24``, so 23:30 interpolates toward
    the hour-0 sample.

    Args:
        samples: The day's hourly samples.
        instant: Civil time; its hour and minutes select the samples and ``t``.

    Returns:
        TrackPosition, the current sample verbatim when the next one is
        missing, or None when there is no sample for the current hour.
    """
    lookup = hourly_lookup(samples)
    hour = instant.hour
    current = lookup.get(hour)
    if current is None:
        logger.debug("No hourly sample for hour %d", hour)
        return None

    following = lookup.get((hour + 1) % 24)
    if following is None:
        return TrackPosition(
            azimuth_deg=current.azimuth_deg,
            altitude_deg=current.altitude_deg,
            is_visible=current.altitude_deg > 0,
        )

    fraction = hour_fraction(instant)
    azimuth = interpolate_angle_deg(
        current.azimuth_deg, following.azimuth_deg, fraction
    )
    altitude = current.altitude_deg + (following.altitude_deg - current.altitude_deg) * fraction
    return TrackPosition(
        azimuth_deg=azimuth, altitude_deg=altitude, is_visible=altitude > 0
    )


def is_daytime(sun: SunDailyRecord, instant: datetime) -> bool:
    """Sunrise inclusive, sunset exclusive."""
    now = clock_hours(instant)
    return parse_clock(sun.sunrise) <= now < parse_clock(sun.sunset)


@dataclass(frozen=True)
class View:
    """One panel of the combined day or night screen."""

    panel: str  # "sky", "sun-east", "sun-west", "moon-phase" or "moon"
    antipode: bool = False


# The daytime sky panel is drawn over the antipode.
DAY_VIEWS = (View("sky", antipode=True), View("sun-east"), View("sun-west"))
NIGHT_VIEWS = (View("sky"), View("moon-phase"), View("moon"))


def views_for(sun: SunDailyRecord, instant: datetime) -> tuple[View, ...]:
    """Panels to show at ``instant``: Sun and antipodal sky by day, local sky and Moon by night."""
    daytime = is_daytime(sun, instant)
    logger.debug("Daytime at %s: %s", instant, daytime)
    return DAY_VIEWS if daytime else NIGHT_VIEWS


def sun_panel(
    sun: SunDailyRecord,
    instant: datetime,
    half: DayHalf,
    *,
    gap_threshold: float = DEFAULT_GAP_THRESHOLD,
    steps: int = DEFAULT_PATH_STEPS,
) -> SunPanel:
    """Build the morning or afternoon Sun panel.

    The panel projection is centred on the Sun's real azimuth range within
    the half-day window. The current Sun is marked only while it is up,
    inside the panel's time window and inside its azimuth window.
    """
    window = half.window
    az_range = azimuth_range(sun.hourly, window)
    project = partial(panel_project, az_range=az_range)

    if half is DayHalf.MORNING:
        start_clock, end_clock = sun.sunrise, sun.solar_noon
        start_az, end_az = sun.azimuth_sunrise, sun.azimuth_noon
    else:
        start_clock, end_clock = sun.solar_noon, sun.sunset
        start_az, end_az = sun.azimuth_noon, sun.azimuth_sunset
    start, end = parse_clock(start_clock), parse_clock(end_clock)

    path = sample_path(
        sun.hourly,
        start,
        end,
        project,
        azimuth_window=window,
        steps=steps,
        gap_threshold=gap_threshold,
    )

    position = interpolate_position(sun.hourly, instant)
    marker: ProjectedPoint | None = None
    now = clock_hours(instant)
    if (
        position is not None
        and position.is_visible
        and start <= now <= end
        and window[0] <= position.azimuth_deg <= window[1]
    ):
        marker = project(
            HorizontalPoint(position.azimuth_deg, position.altitude_deg)
        )

    horizon_y = project(HorizontalPoint(az_range.min_deg, 0.0)).y
    logger.debug(
        "Sun %s panel: %d sub-paths, marker=%s", half.name.lower(), len(path), marker
    )
    return SunPanel(
        half=half,
        path=tuple(tuple(p) for p in path),
        azimuth_range=az_range,
        horizon_y=horizon_y,
        position=position,
        marker=marker,
        start_clock=start_clock,
        end_clock=end_clock,
        start_azimuth_deg=start_az,
        end_azimuth_deg=end_az,
        noon_altitude_deg=sun.altitude_noon,
    )


def moon_panel(
    moon: MoonDailyRecord,
    instant: datetime,
    projection: ProjectionConfig = MOON_PROJECTION,
    filter_config: FilterConfig | None = None,
) -> MoonPanel:
    """Build the Moon position panel on the azimuthal projection."""
    gap = (filter_config or FilterConfig()).gap_threshold
    project = partial(azimuthal_project, config=projection)
    path = visible_track(moon.hourly, project, gap)
    position = interpolate_position(moon.hourly, instant)
    marker = None
    if position is not None and position.is_visible:
        marker = project(HorizontalPoint(position.azimuth_deg, position.altitude_deg))
    return MoonPanel(
        path=tuple(tuple(p) for p in path),
        position=position,
        marker=marker,
        phase=classify_phase(moon.phase),
        illumination=(
            moon.illumination
            if moon.illumination is not None
            else illuminated_fraction(moon.phase) * 100.0
        ),
        moonrise=moon.moonrise,
        moonset=moon.moonset,
    )
