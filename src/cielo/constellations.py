"""Constellation line projection with per-constellation label centroids."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from cielo.coords import horizontal_from_sidereal
from cielo.models import (
    Constellation,
    ConstellationCentroid,
    ConstellationProjection,
    EquatorialPoint,
    Hemisphere,
    Observer,
    ProjectedPoint,
    ProjectionConfig,
)
from cielo.projection import DEFAULT_PROJECTION, azimuthal_project
from cielo.segments import DEFAULT_GAP_THRESHOLD, has_gap
from cielo.time_utils import local_sidereal_time_deg

logger = logging.getLogger(__name__)


def _in_hemisphere(vertex: EquatorialPoint, hemisphere: Hemisphere) -> bool:
    # Declination 0 belongs to both hemispheres.
    if hemisphere is Hemisphere.NORTH:
        return vertex.dec_deg >= 0
    return vertex.dec_deg <= 0


def project_polyline(
    vertices: Iterable[EquatorialPoint],
    latitude_deg: float,
    lst_deg: float,
    hemisphere: Hemisphere,
    projection: ProjectionConfig = DEFAULT_PROJECTION,
) -> list[ProjectedPoint] | None:
    """Project every vertex of one polyline, or reject the whole polyline.

    Returns:
        Projected vertices, or None when any vertex lies in the other
        hemisphere or below the horizon.
    """
    points: list[ProjectedPoint] = []
    for vertex in vertices:
        if not _in_hemisphere(vertex, hemisphere):
            return None
        horizontal = horizontal_from_sidereal(
            vertex.ra_deg, vertex.dec_deg, latitude_deg, lst_deg
        )
        if horizontal.altitude_deg < 0:
            return None
        points.append(azimuthal_project(horizontal, projection))
    return points


def project_constellations(
    constellations: Iterable[Constellation],
    observer: Observer,
    instant: datetime,
    *,
    hemisphere: Hemisphere | None = None,
    projection: ProjectionConfig = DEFAULT_PROJECTION,
    gap_threshold: float = DEFAULT_GAP_THRESHOLD,
) -> ConstellationProjection:
    """Project constellation polylines and place one label per constellation.

    A polyline survives only if every vertex is in the rendered hemisphere
    and above the horizon, it has at least two vertices, and no consecutive
    pair is further apart than ``gap_threshold``. Partial lines are never
    drawn.

    Args:
        constellations: Constellation geometry in equatorial coordinates.
        observer: Observer location.
        instant: Point in time.
        hemisphere: Rendered hemisphere; defaults to the observer's.
        projection: Azimuthal projection config.
        gap_threshold: Wrap-around gap limit in plane units.

    Returns:
        ConstellationProjection with surviving lines in input order and the
        mean position of each constellation's surviving vertices.
    """
    hemisphere = hemisphere or observer.hemisphere
    lst = local_sidereal_time_deg(instant, observer.wrapped_longitude_deg)

    lines: list[tuple[ProjectedPoint, ...]] = []
    sums: dict[str, list[float]] = defaultdict(lambda: [0.0, 0.0, 0.0])
    names: dict[str, str | None] = {}
    dropped_gaps = 0

    for constellation in constellations:
        for vertices in constellation.lines:
            points = project_polyline(
                vertices, observer.latitude_deg, lst, hemisphere, projection
            )
            if points is None or len(points) < 2:
                continue
            if has_gap(points, gap_threshold):
                dropped_gaps += 1
                continue
            lines.append(tuple(points))
            acc = sums[constellation.identifier]
            acc[0] += sum(p.x for p in points)
            acc[1] += sum(p.y for p in points)
            acc[2] += len(points)
            names[constellation.identifier] = constellation.name

    centroids = tuple(
        ConstellationCentroid(
            identifier=ident,
            name=names[ident],
            point=ProjectedPoint(x=sx / n, y=sy / n),
            vertex_count=int(n),
        )
        for ident, (sx, sy, n) in sums.items()
    )
    logger.debug(
        "Constellation lines drawn: %d (%d dropped at wrap gaps), labels: %d",
        len(lines),
        dropped_gaps,
        len(centroids),
    )
    return ConstellationProjection(lines=tuple(lines), centroids=centroids)
