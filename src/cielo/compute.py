"""Sky panel computation layer: visible stars, constellation lines and horizon marks."""

import logging
from collections.abc import Iterable
from datetime import datetime

from pytz import utc

from cielo import config
from cielo.catalog import DataSet, load_dataset
from cielo.constellations import project_constellations
from cielo.coords import horizontal_from_sidereal
from cielo.i18n import t
from cielo.models import (
    CardinalMark,
    Constellation,
    FilterConfig,
    Hemisphere,
    HorizontalPoint,
    Observer,
    ProjectionConfig,
    SkyData,
    StarCatalogEntry,
    VisibleObject,
)
from cielo.projection import DEFAULT_PROJECTION, azimuthal_project
from cielo.segments import is_visible
from cielo.time_utils import civil_instant, format_clock, local_sidereal_time_deg

logger = logging.getLogger(__name__)

# (exclusive magnitude bound, symbol, CSS size); brighter stars first.
_STAR_STYLES: tuple[tuple[float, str, str], ...] = (
    (1.0, "●", "1.2em"),
    (3.0, "★", "1em"),
    (5.0, "+", "0.8em"),
    (6.0, "·", "0.6em"),
)
_FAINT_STYLE = (".", "0.5em")

_CARDINALS: tuple[tuple[str, float], ...] = (
    ("cardinal_n", 0.0),
    ("cardinal_e", 90.0),
    ("cardinal_s", 180.0),
    ("cardinal_w", 270.0),
)


def star_symbol(magnitude: float) -> str:
    """Display glyph for a magnitude."""
    return _star_style(magnitude)[0]


def star_size(magnitude: float) -> str:
    """CSS font size for a magnitude."""
    return _star_style(magnitude)[1]


def _star_style(magnitude: float) -> tuple[str, str]:
    for bound, symbol, size in _STAR_STYLES:
        if magnitude < bound:
            return symbol, size
    return _FAINT_STYLE


def _in_star_hemisphere(star: StarCatalogEntry, hemisphere: Hemisphere) -> bool:
    # Stars on the celestial equator belong to neither panel.
    if hemisphere is Hemisphere.NORTH:
        return star.dec_deg > 0
    return star.dec_deg < 0


def visible_stars(
    catalog: Iterable[StarCatalogEntry],
    observer: Observer,
    instant: datetime,
    *,
    hemisphere: Hemisphere | None = None,
    filter_config: FilterConfig | None = None,
    projection: ProjectionConfig = DEFAULT_PROJECTION,
) -> tuple[VisibleObject, ...]:
    """Project the catalog stars that are above the horizon.

    Stars fainter than the magnitude limit or in the other celestial
    hemisphere are dropped before any coordinate work.

    Args:
        catalog: Star catalog, sorted or unsorted.
        observer: Observer location.
        instant: Point in time.
        hemisphere: Celestial hemisphere of the panel; defaults to the observer's.
        filter_config: Magnitude cutoff.
        projection: Azimuthal projection config.

    Returns:
        Visible objects in catalog order.
    """
    filter_config = filter_config or FilterConfig()
    hemisphere = hemisphere or observer.hemisphere
    lst = local_sidereal_time_deg(instant, observer.wrapped_longitude_deg)

    objects: list[VisibleObject] = []
    for star in catalog:
        if star.magnitude > filter_config.magnitude_limit:
            continue
        if not _in_star_hemisphere(star, hemisphere):
            continue
        horizontal = horizontal_from_sidereal(
            star.ra_deg, star.dec_deg, observer.latitude_deg, lst
        )
        if not is_visible(horizontal):
            continue
        objects.append(
            VisibleObject(
                point=azimuthal_project(horizontal, projection),
                symbol=star_symbol(star.magnitude),
                size=star_size(star.magnitude),
                source=star,
                horizontal=horizontal,
            )
        )
    logger.debug("Visible stars (%s): %d", hemisphere.value, len(objects))
    return tuple(objects)


def cardinal_marks(
    projection: ProjectionConfig = DEFAULT_PROJECTION, lang: str = "en"
) -> tuple[CardinalMark, ...]:
    """Compass labels on the horizon ring."""
    return tuple(
        CardinalMark(
            label=t(key, lang),
            azimuth_deg=azimuth,
            point=azimuthal_project(HorizontalPoint(azimuth, 0.0), projection),
        )
        for key, azimuth in _CARDINALS
    )


def compute_sky_data(
    observer: Observer,
    instant: datetime,
    catalog: Iterable[StarCatalogEntry],
    constellations: Iterable[Constellation] = (),
    *,
    hemisphere: Hemisphere | None = None,
    filter_config: FilterConfig | None = None,
    projection: ProjectionConfig = DEFAULT_PROJECTION,
    lang: str = "en",
) -> SkyData:
    """Compute one night-sky panel.

    Args:
        observer: Observer location.
        instant: Civil time of the observer.
        catalog: Star catalog.
        constellations: Constellation line geometry; may be empty.
        hemisphere: Celestial hemisphere; defaults to the observer's.
        filter_config: Magnitude cutoff and gap threshold.
        projection: Azimuthal projection config.
        lang: Language code for the cardinal labels.

    Returns:
        SkyData containing visible stars, constellation lines and labels.
    """
    filter_config = filter_config or FilterConfig()
    hemisphere = hemisphere or observer.hemisphere
    stars = visible_stars(
        catalog,
        observer,
        instant,
        hemisphere=hemisphere,
        filter_config=filter_config,
        projection=projection,
    )
    lines = project_constellations(
        constellations,
        observer,
        instant,
        hemisphere=hemisphere,
        projection=projection,
        gap_threshold=filter_config.gap_threshold,
    )
    return SkyData(
        observer=observer,
        hemisphere=hemisphere,
        when=format_clock(instant),
        stars=stars,
        constellations=lines,
        cardinals=cardinal_marks(projection, lang),
        magnitude_limit=filter_config.magnitude_limit,
        projection=projection,
    )


def run(
    when: str | datetime | None = None,
    *,
    antipode: bool = False,
    dataset: DataSet | None = None,
    lang: str = "en",
) -> SkyData:
    """Top-level entry point: configured observer (or its antipode) at a civil time.

    Args:
        when: "YYYY-MM-DD HH:MM" or datetime in the observer's zone; now if None.
        antipode: Render the point opposite the configured observer.
        dataset: Preloaded data; loaded from the configured directory if None.
        lang: Language code for labels.

    Returns:
        Fully computed SkyData.
    """
    observer = config.get_observer()
    instant = civil_instant(when or datetime.now(utc), config.get_timezone())
    if dataset is None:
        dataset = load_dataset(
            config.get_data_dir(), config.get_location(), config.get_star_ra_unit()
        )
    if antipode:
        observer = observer.antipode()
    return compute_sky_data(
        observer,
        instant,
        dataset.stars,
        dataset.constellations,
        filter_config=config.get_filter_config(),
        projection=config.get_projection_config(),
        lang=lang,
    )
