"""SVG renderers for sky, Sun, and Moon panels.

Every chart uses viewBox="0 0 100 100", the engine's normalized plane, so
projected points are written out unchanged:

  x ∈ [0, 100]  (left → right; East is right of center on sky charts)
  y ∈ [0, 100]  (top → bottom; North is up on sky charts)

``render_svg_html`` wraps any of them into a standalone dark page.
"""

from __future__ import annotations

import html

from cielo.i18n import t
from cielo.models import ProjectedPoint, SkyData
from cielo.moon_phase import DISK_CENTER, DISK_RADIUS, MoonPhaseInfo, moon_silhouette
from cielo.segments import to_svg_path
from cielo.tracks import DayHalf, MoonPanel, SunPanel

_BG = "#0d1b35"
_STAR_COLOR = "#f0e0b0"
_LINE_COLOR = "#c9a96e"
_HORIZON_COLOR = "#c9a96e"
_LABEL_COLOR = "#c9a96e"


def _star_font_size(size: str) -> float:
    """CSS em size → font size in viewBox units."""
    # One em renders as roughly 2.4% of the chart height.
    try:
        em = float(size.removesuffix("em"))
    except ValueError:
        em = 1.0
    return round(em * 2.4, 3)


def _star_opacity(magnitude: float) -> float:
    """Dimmer stars are more transparent, reinforcing magnitude difference."""
    return max(0.35, min(1.0, (6 - magnitude) / 6))


def _svg_open(preserve_aspect: str) -> str:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100"'
        f' preserveAspectRatio="{preserve_aspect}">'
        f'<rect x="0" y="0" width="100" height="100" fill="{_BG}"/>'
    )


def _glyph(point: ProjectedPoint, text: str, size: float, extra: str = "") -> str:
    return (
        f'<text x="{point.x:.3f}" y="{point.y:.3f}" font-size="{size:g}"'
        f' text-anchor="middle" dominant-baseline="central"{extra}>'
        f"{html.escape(text)}</text>"
    )


def render_sky_svg(
    sky_data: SkyData,
    preserve_aspect: str = "xMidYMid meet",
    show_labels: bool = True,
) -> str:
    """Return an SVG document of a night-sky panel.

    Stars are drawn as magnitude glyphs, constellation lines as thin dashed
    paths, and the horizon as the unit circle of the projection.

    Args:
        sky_data: Fully computed sky panel.
        preserve_aspect: SVG preserveAspectRatio; "none" stretches the disk to
            fill a non-square container.
        show_labels: Draw constellation labels at their centroids.

    Returns:
        SVG markup.
    """
    proj = sky_data.projection
    horizon = (
        f'<ellipse cx="{proj.center_x:g}" cy="{proj.center_y:g}"'
        f' rx="{proj.scale_x:g}" ry="{proj.scale_y:g}" fill="none"'
        f' stroke="{_HORIZON_COLOR}" stroke-width="0.3" stroke-opacity="0.5"/>'
    )

    line_parts = [
        f'<path d="{to_svg_path([line])}" stroke="{_LINE_COLOR}" stroke-width="0.15"'
        ' stroke-dasharray="0.5 0.8" fill="none" opacity="0.4"'
        ' vector-effect="non-scaling-stroke"/>'
        for line in sky_data.constellations.lines
    ]

    label_parts: list[str] = []
    if show_labels:
        for c in sky_data.constellations.centroids:
            label_parts.append(
                _glyph(
                    c.point,
                    c.name or c.identifier,
                    1.6,
                    f' fill="{_LABEL_COLOR}" opacity="0.5"',
                )
            )

    star_parts: list[str] = []
    for s in sky_data.stars:
        title = ""
        if s.source.name:
            title = f"<title>{html.escape(s.source.name)} (mag {s.source.magnitude:.1f})</title>"
        star_parts.append(
            f'<g opacity="{_star_opacity(s.source.magnitude):.2f}">'
            + _glyph(s.point, s.symbol, _star_font_size(s.size), f' fill="{_STAR_COLOR}"')
            + title
            + "</g>"
        )

    cardinal_parts = [
        _glyph(
            c.point,
            c.label,
            3,
            f' fill="{_LABEL_COLOR}" font-weight="bold" opacity="0.6"',
        )
        for c in sky_data.cardinals
    ]

    return (
        _svg_open(preserve_aspect)
        + horizon
        + '<g id="lines">' + "".join(line_parts) + "</g>"
        + '<g id="labels">' + "".join(label_parts) + "</g>"
        + '<g id="stars">' + "".join(star_parts) + "</g>"
        + '<g id="cardinals">' + "".join(cardinal_parts) + "</g>"
        + "</svg>"
    )


def render_sun_svg(panel: SunPanel, preserve_aspect: str = "none") -> str:
    """Return an SVG document of one half of the Sun's day."""
    parts = [
        f'<line x1="0" y1="{panel.horizon_y:.3f}" x2="100" y2="{panel.horizon_y:.3f}"'
        f' stroke="{_STAR_COLOR}" stroke-width="0.1" opacity="0.2"/>'
    ]
    if panel.path:
        parts.append(
            f'<path d="{to_svg_path(panel.path)}" stroke="{_STAR_COLOR}" stroke-width="0.3"'
            ' stroke-dasharray="1 1.5" fill="none" opacity="0.5"/>'
        )
    if panel.marker is not None:
        parts.append(_glyph(panel.marker, "☼", 6, f' fill="{_STAR_COLOR}"'))
    return _svg_open(preserve_aspect) + "".join(parts) + "</svg>"


def render_moon_position_svg(panel: MoonPanel, preserve_aspect: str = "xMidYMid meet") -> str:
    """Return an SVG document of the Moon's night path and current position."""
    parts: list[str] = []
    if panel.path:
        parts.append(
            f'<path d="{to_svg_path(panel.path)}" stroke="{_STAR_COLOR}" stroke-width="0.3"'
            ' stroke-dasharray="1 1.5" fill="none" opacity="0.3"/>'
        )
    if panel.marker is not None:
        parts.append(_glyph(panel.marker, panel.phase.symbol, 6, f' fill="{_STAR_COLOR}"'))
    return _svg_open(preserve_aspect) + "".join(parts) + "</svg>"


def render_moon_phase_svg(phase: MoonPhaseInfo) -> str:
    """Return an SVG document of the Moon's lit fraction on a faint full disk."""
    cx, cy = DISK_CENTER
    silhouette = moon_silhouette(phase.phase, DISK_CENTER, DISK_RADIUS)
    parts = [
        f'<circle cx="{cx:g}" cy="{cy:g}" r="{DISK_RADIUS:g}" fill="{_STAR_COLOR}" opacity="0.2"/>'
    ]
    if silhouette.path:
        parts.append(f'<path d="{silhouette.path}" fill="{_STAR_COLOR}"/>')
    return _svg_open("xMidYMid meet") + "".join(parts) + "</svg>"


def sky_info_lines(sky_data: SkyData, place: str, lang: str = "en") -> list[str]:
    return [
        t("sky_summary", lang).format(
            place=place, count=len(sky_data.stars), limit=sky_data.magnitude_limit
        ),
        sky_data.when,
    ]


def _with_azimuth(line: str, azimuth: float | None, lang: str) -> str:
    if azimuth is None:
        return line
    return t("event_azimuth", lang).format(line=line, az=azimuth)


def sun_info_lines(panel: SunPanel, lang: str = "en") -> list[str]:
    if panel.half is DayHalf.MORNING:
        first, second = "sunrise", "solar_noon"
    else:
        first, second = "solar_noon", "sunset"
    lines = [
        _with_azimuth(t(first, lang).format(time=panel.start_clock), panel.start_azimuth_deg, lang),
        _with_azimuth(t(second, lang).format(time=panel.end_clock), panel.end_azimuth_deg, lang),
    ]
    if panel.noon_altitude_deg is not None:
        lines.append(t("sun_max_altitude", lang).format(alt=panel.noon_altitude_deg))
    return lines


def moon_info_lines(panel: MoonPanel, lang: str = "en") -> list[str]:
    lines: list[str] = []
    if panel.position is not None:
        lines.append(
            t("moon_position", lang).format(
                az=panel.position.azimuth_deg, alt=panel.position.altitude_deg
            )
        )
        lines.append(
            t("moon_visible" if panel.position.is_visible else "moon_below_horizon", lang)
        )
    lines.append(panel.phase.name(lang))
    lines.append(t("moon_illumination", lang).format(pct=panel.illumination))
    na = t("not_available", lang)
    lines.append(t("moonrise", lang).format(time=panel.moonrise or na))
    lines.append(t("moonset", lang).format(time=panel.moonset or na))
    return lines


def render_svg_html(svg: str, info_lines: list[str] | None = None, title: str = "cielo") -> str:
    """Return a self-contained HTML page showing an SVG chart full-screen.

    Args:
        svg: SVG markup from one of the render_* functions.
        info_lines: Optional text lines shown at the bottom of the page.
        title: Page title.

    Returns:
        HTML string.
    """
    info = "<br>".join(html.escape(line) for line in (info_lines or []))
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{html.escape(title)}</title>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{
    width: 100%;
    height: 100%;
    background: {_BG};
    overflow: hidden;
}}
svg {{
    display: block;
    width: 100%;
    height: 100%;
}}
#info {{
    position: fixed;
    bottom: 1rem;
    left: 50%;
    transform: translateX(-50%);
    color: {_LABEL_COLOR};
    font-size: clamp(0.7rem, 1.5vw, 0.9rem);
    text-align: center;
    pointer-events: none;
}}
</style>
</head>
<body>
{svg}
<div id="info">{info}</div>
</body>
</html>"""


def render_views_html(
    sections: list[tuple[str, str, list[str]]], title: str = "cielo"
) -> str:
    """Return an HTML page laying out several panels side by side.

    Args:
        sections: (heading, svg, info_lines) per panel, in display order.
        title: Page title.

    Returns:
        HTML string.
    """
    blocks = []
    for heading, svg, info_lines in sections:
        info = "<br>".join(html.escape(line) for line in info_lines)
        blocks.append(
            f'<section><h2>{html.escape(heading)}</h2>{svg}<p>{info}</p></section>'
        )
    body = "\n".join(blocks)
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{html.escape(title)}</title>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{
    width: 100%;
    height: 100%;
    background: {_BG};
    color: {_LABEL_COLOR};
}}
body {{
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(18rem, 1fr));
    gap: 1rem;
    padding: 1rem;
}}
section {{
    display: flex;
    flex-direction: column;
    min-height: 18rem;
}}
h2 {{
    font-size: 0.8rem;
    font-weight: normal;
    letter-spacing: 0.1em;
    text-transform: lowercase;
}}
svg {{
    flex: 1;
    width: 100%;
    min-height: 14rem;
}}
p {{
    font-size: clamp(0.7rem, 1.5vw, 0.9rem);
    text-align: center;
}}
</style>
</head>
<body>
{body}
</body>
</html>"""
