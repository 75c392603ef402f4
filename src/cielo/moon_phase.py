"""Moon phase classification and illuminated-disk silhouette."""

import math
from dataclasses import dataclass

from cielo.i18n import t

# (exclusive upper bound, key, symbol). Phases above the last bound wrap to new.
# Symbol and name both come from this one table so they cannot disagree.
_PHASE_TABLE: tuple[tuple[float, str, str], ...] = (
    (0.05, "new", "●"),
    (0.25, "waxing_crescent", "☽"),
    (0.30, "first_quarter", "◐"),
    (0.45, "waxing_gibbous", "◐"),
    (0.55, "full", "○"),
    (0.70, "waning_gibbous", "◑"),
    (0.75, "last_quarter", "◑"),
    (0.95, "waning_crescent", "☾"),
)
PHASE_KEYS: tuple[str, ...] = tuple(key for _, key, _ in _PHASE_TABLE)

DISK_CENTER = (50.0, 50.0)
DISK_RADIUS = 45.0


@dataclass(frozen=True)
class MoonPhaseInfo:
    """Classification of a phase fraction."""

    phase: float  # Normalized to [0, 1)
    key: str  # One of PHASE_KEYS
    symbol: str

    def name(self, lang: str = "en") -> str:
        return t(f"phase_{self.key}", lang)


@dataclass(frozen=True)
class MoonSilhouette:
    """Illuminated region of the disk as SVG path data.

    kind is "empty" (new moon), "disk" (full moon) or "arcs": a limb arc of
    the full radius closed by a terminator arc of varying horizontal radius.
    """

    kind: str
    path: str
    center: tuple[float, float]
    limb_radius: float
    terminator_radius: float
    limb_sweep: int
    terminator_sweep: int


def normalize_phase(phase: float | None) -> float:
    """Reduce a phase to [0, 1). Missing or non-finite phases become new moon."""
    if phase is None or not math.isfinite(phase):
        return 0.0
    p = phase % 1.0
    return 0.0 if p >= 1.0 else p


def classify_phase(phase: float | None) -> MoonPhaseInfo:
    """Bucket a phase fraction into one of eight named phases."""
    p = normalize_phase(phase)
    for upper, key, symbol in _PHASE_TABLE:
        if p < upper:
            return MoonPhaseInfo(phase=p, key=key, symbol=symbol)
    # The last bound itself still belongs to the waning crescent.
    last, key, symbol = _PHASE_TABLE[-1]
    if p > last:
        _, key, symbol = _PHASE_TABLE[0]
    return MoonPhaseInfo(phase=p, key=key, symbol=symbol)


def phase_name(phase: float | None, lang: str = "en") -> str:
    return classify_phase(phase).name(lang)


def illuminated_fraction(phase: float | None) -> float:
    """Lit fraction of the disk, 0 at new moon and 1 at full moon."""
    p = normalize_phase(phase)
    return (1.0 - math.cos(2.0 * math.pi * p)) / 2.0


def terminator_radius(phase: float | None, limb_radius: float = DISK_RADIUS) -> float:
    """Horizontal radius of the terminator ellipse.

    Equals ``limb_radius`` at new and full moon and 0 at the quarters, moving
    monotonically within each quarter and continuously through 0.5.
    """
    p = normalize_phase(phase)
    return limb_radius * abs(math.cos(2.0 * math.pi * p))


def moon_silhouette(
    phase: float | None,
    center: tuple[float, float] = DISK_CENTER,
    radius: float = DISK_RADIUS,
) -> MoonSilhouette:
    """Build the lit-region shape for a phase.

    The path starts at the top of the disk, follows the limb to the bottom on
    the lit side (right while waxing, left while waning) and returns along the
    terminator. Crescents bulge the terminator towards the lit limb, gibbous
    phases away from it.

    Args:
        phase: Phase fraction (0=new, 0.5=full).
        center: Disk center in the drawing's coordinates.
        radius: Limb radius.

    Returns:
        MoonSilhouette; ``path`` is empty for a new moon.
    """
    info = classify_phase(phase)
    p = info.phase
    cx, cy = center
    rx = terminator_radius(p, radius)

    if info.key == "new":
        return MoonSilhouette("empty", "", center, radius, rx, 0, 0)
    if info.key == "full":
        path = (
            f"M {cx - radius:g} {cy:g} "
            f"A {radius:g} {radius:g} 0 1 0 {cx + radius:g} {cy:g} "
            f"A {radius:g} {radius:g} 0 1 0 {cx - radius:g} {cy:g} Z"
        )
        return MoonSilhouette("disk", path, center, radius, rx, 0, 0)

    waxing = p < 0.5
    crescent = p < 0.25 or p > 0.75
    # SVG sweep 1 is clockwise on screen: top → right → bottom.
    limb_sweep = 1 if waxing else 0
    terminator_sweep = 1 - limb_sweep if crescent else limb_sweep
    top, bottom = cy - radius, cy + radius
    path = (
        f"M {cx:g} {top:g} "
        f"A {radius:g} {radius:g} 0 0 {limb_sweep} {cx:g} {bottom:g} "
        f"A {rx:.4f} {radius:g} 0 0 {terminator_sweep} {cx:g} {top:g} Z"
    )
    return MoonSilhouette("arcs", path, center, radius, rx, limb_sweep, terminator_sweep)
