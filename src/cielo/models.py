"""Data model definitions: explicit boundaries between loading, compute, and render layers."""

from dataclasses import dataclass, field
from enum import Enum

from cielo.angle_utils import wrap_longitude_deg


class Hemisphere(str, Enum):
    """Celestial hemisphere rendered by a sky panel."""

    NORTH = "north"
    SOUTH = "south"


@dataclass(frozen=True)
class Observer:
    """Fixed terrestrial observer. Longitude is wrapped to [-180, 180) on use."""

    latitude_deg: float  # -90 (south pole) .. 90 (north pole)
    longitude_deg: float  # East positive
    name: str = ""

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude_deg <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude_deg}")

    @property
    def wrapped_longitude_deg(self) -> float:
        return wrap_longitude_deg(self.longitude_deg)

    @property
    def hemisphere(self) -> Hemisphere:
        """Hemisphere overhead; the equator counts as north."""
        return Hemisphere.NORTH if self.latitude_deg >= 0 else Hemisphere.SOUTH

    def antipode(self, name: str = "") -> "Observer":
        """Point on the opposite side of the Earth."""
        return Observer(
            latitude_deg=-self.latitude_deg,
            longitude_deg=wrap_longitude_deg(self.longitude_deg + 180.0),
            name=name or (f"{self.name} antipode" if self.name else ""),
        )


@dataclass(frozen=True)
class EquatorialPoint:
    """Right ascension / declination of a star or a Sun/Moon sample."""

    ra_deg: float  # [0, 360)
    dec_deg: float  # [-90, 90]


@dataclass(frozen=True)
class HorizontalPoint:
    """Azimuth (clockwise from North) and altitude above the horizon."""

    azimuth_deg: float  # [0, 360): 0=N, 90=E, 180=S, 270=W
    altitude_deg: float  # [-90, 90]: 90=zenith, negative=below horizon


@dataclass(frozen=True)
class ProjectedPoint:
    """Position on the normalized display plane ([0, 100] x [0, 100] nominal)."""

    x: float
    y: float


@dataclass(frozen=True)
class ProjectionConfig:
    """Azimuthal projection scale policy.

    Equal scales give a classic planisphere. Independent scales let the disk
    overfill a non-square viewport; points may then fall outside [0, 100].
    """

    scale_x: float = 50.0
    scale_y: float = 50.0
    center_x: float = 50.0
    center_y: float = 50.0


@dataclass(frozen=True)
class FilterConfig:
    """Visibility and segmentation knobs."""

    magnitude_limit: float = 6.0  # Stars fainter than this are skipped before any transform
    gap_threshold: float = 40.0  # Max projected distance between connected points


@dataclass(frozen=True)
class HourlySample:
    """One of the 24 precomputed positions of a body for a given day."""

    hour: int  # 0..23, civil time
    azimuth_deg: float
    altitude_deg: float
    is_visible: bool


@dataclass(frozen=True)
class SunDailyRecord:
    """Sun events and hourly positions for one day."""

    date: str  # "YYYY-MM-DD"
    sunrise: str  # "HH:MM"
    sunset: str  # "HH:MM"
    solar_noon: str  # "HH:MM"
    hourly: tuple[HourlySample, ...]
    azimuth_sunrise: float | None = None
    azimuth_sunset: float | None = None
    azimuth_noon: float | None = None
    altitude_noon: float | None = None


@dataclass(frozen=True)
class MoonDailyRecord:
    """Moon phase, events and hourly positions for one day."""

    date: str  # "YYYY-MM-DD"
    phase: float  # [0, 1): 0=new, 0.5=full
    illumination: float | None  # Illuminated percent, 0..100; None when not recorded
    hourly: tuple[HourlySample, ...]
    moonrise: str | None = None  # "HH:MM", None when the Moon does not rise that day
    moonset: str | None = None


@dataclass(frozen=True)
class StarCatalogEntry:
    """Static catalog star."""

    ra_deg: float
    dec_deg: float
    magnitude: float  # Apparent magnitude
    name: str | None = None


@dataclass(frozen=True)
class Constellation:
    """Named set of polylines in equatorial coordinates."""

    identifier: str  # IAU abbreviation ("Ori", "UMa", etc.)
    lines: tuple[tuple[EquatorialPoint, ...], ...]
    name: str | None = None


@dataclass(frozen=True)
class VisibleObject:
    """A plotted object: where it lands and how to draw it."""

    point: ProjectedPoint
    symbol: str
    size: str  # CSS font size ("1.2em")
    source: StarCatalogEntry
    horizontal: HorizontalPoint


@dataclass(frozen=True)
class TrackPosition:
    """Interpolated Sun/Moon position at an instant."""

    azimuth_deg: float
    altitude_deg: float
    is_visible: bool


@dataclass(frozen=True)
class ConstellationCentroid:
    """Label anchor: mean of the surviving projected vertices."""

    identifier: str
    name: str | None
    point: ProjectedPoint
    vertex_count: int


@dataclass(frozen=True)
class ConstellationProjection:
    """Surviving projected polylines plus one centroid per constellation."""

    lines: tuple[tuple[ProjectedPoint, ...], ...] = ()
    centroids: tuple[ConstellationCentroid, ...] = ()


@dataclass(frozen=True)
class CardinalMark:
    """Compass label placed on the horizon ring."""

    label: str
    azimuth_deg: float
    point: ProjectedPoint


@dataclass(frozen=True)
class SkyData:
    """The sole input to sky renderers. Fully computed state for one panel."""

    observer: Observer
    hemisphere: Hemisphere
    when: str  # Civil "HH:MM" shown under the chart
    stars: tuple[VisibleObject, ...]
    constellations: ConstellationProjection
    cardinals: tuple[CardinalMark, ...]
    magnitude_limit: float
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
