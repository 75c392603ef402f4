"""CLI entry point for chart generation.

    cielo-starchart --when "2025-01-15 22:30" --panel sky --format html
    cielo-starchart --panel moon-phase --lang es --output moon.svg
    cielo-starchart --panel auto --output now.html

Observer, data directory and engine knobs come from CIELO_* environment
variables (or a .env file).
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from pytz import utc

from cielo import config
from cielo.catalog import DataFormatError, DataSet, load_dataset
from cielo.compute import run
from cielo.i18n import t
from cielo.moon_phase import classify_phase
from cielo.renderers.plotly_2d import render_plotly_html
from cielo.renderers.static import save_static_chart
from cielo.renderers.svg_2d import (
    moon_info_lines,
    render_moon_phase_svg,
    render_moon_position_svg,
    render_sky_svg,
    render_sun_svg,
    render_svg_html,
    render_views_html,
    sky_info_lines,
    sun_info_lines,
)
from cielo.time_utils import civil_instant, date_key
from cielo.tracks import DayHalf, moon_panel, sun_panel, views_for

logger = logging.getLogger(__name__)

PANELS = ("sky", "sun-east", "sun-west", "moon", "moon-phase", "auto")
FORMATS = ("svg", "html", "png", "plotly")


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI (stderr, level from --verbose or CIELO_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get("CIELO_LOG", "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cielo-starchart",
        description="Render sky, Sun and Moon charts from precomputed ephemeris data.",
    )
    parser.add_argument(
        "--when",
        help='civil time "YYYY-MM-DD HH:MM" in the observer\'s zone (default: now)',
    )
    parser.add_argument(
        "--antipode",
        action="store_true",
        help="render the sky over the point opposite the observer",
    )
    parser.add_argument("--panel", choices=PANELS, default="sky")
    parser.add_argument("--format", choices=FORMATS, default="svg", dest="fmt")
    parser.add_argument("--output", type=Path, help="output file (default: stdout)")
    parser.add_argument("--lang", choices=("en", "es"), default="en")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"Saved: {output}", file=sys.stderr)


def _panel_svg(
    panel: str,
    instant: datetime,
    dataset: DataSet,
    *,
    antipode: bool = False,
    lang: str = "en",
) -> tuple[str, list[str]]:
    """SVG document and info lines for one panel."""
    filter_config = config.get_filter_config()
    key = date_key(instant)

    if panel == "sky":
        sky_data = run(instant, antipode=antipode, dataset=dataset, lang=lang)
        return render_sky_svg(sky_data), sky_info_lines(sky_data, sky_data.observer.name, lang)
    if panel in ("sun-east", "sun-west"):
        sun = dataset.sun_for(key)
        if sun is None:
            raise ValueError(f"no Sun data for {key}")
        half = DayHalf.MORNING if panel == "sun-east" else DayHalf.AFTERNOON
        sun_data = sun_panel(sun, instant, half, gap_threshold=filter_config.gap_threshold)
        return render_sun_svg(sun_data), sun_info_lines(sun_data, lang)

    moon = dataset.moon_for(key)
    if moon is None:
        raise ValueError(f"no Moon data for {key}")
    if panel == "moon":
        moon_data = moon_panel(moon, instant, filter_config=filter_config)
        return render_moon_position_svg(moon_data), moon_info_lines(moon_data, lang)
    phase = classify_phase(moon.phase)
    return render_moon_phase_svg(phase), [phase.name(lang)]


def render_views(instant: datetime, dataset: DataSet, lang: str = "en") -> str:
    """HTML page with the day or night panel set chosen from the Sun record.

    Raises:
        ValueError: The dataset has no Sun record for the instant's date.
    """
    key = date_key(instant)
    sun = dataset.sun_for(key)
    if sun is None:
        raise ValueError(f"no Sun data for {key}")
    views = views_for(sun, instant)
    logger.info("Rendering %s", ", ".join(v.panel for v in views))
    sections = []
    for view in views:
        svg, info = _panel_svg(view.panel, instant, dataset, antipode=view.antipode, lang=lang)
        heading_key = "view_" + view.panel.replace("-", "_")
        if view.antipode:
            heading_key += "_antipode"
        sections.append((t(heading_key, lang), svg, info))
    return render_views_html(sections, title="cielo")


def render_panel(
    panel: str,
    fmt: str,
    instant: datetime,
    dataset: DataSet,
    *,
    antipode: bool = False,
    lang: str = "en",
    output: Path | None = None,
) -> str | None:
    """Render one panel and return its text, or None after writing a PNG.

    The "auto" panel always renders the day or night HTML page; ``antipode``
    does not apply to it.

    Raises:
        ValueError: The format does not apply to the panel, or the dataset has
            no record for the instant's date.
    """
    if fmt in ("png", "plotly") and panel != "sky":
        raise ValueError(f"--format {fmt} is only available for the sky panel")
    if panel == "auto":
        return render_views(instant, dataset, lang)

    if fmt in ("png", "plotly"):
        sky_data = run(instant, antipode=antipode, dataset=dataset, lang=lang)
        if fmt == "plotly":
            return render_plotly_html(sky_data)
        path = save_static_chart(sky_data, output)
        print(f"Saved: {path}", file=sys.stderr)
        return None

    svg, info = _panel_svg(panel, instant, dataset, antipode=antipode, lang=lang)
    if fmt == "html":
        return render_svg_html(svg, info, title=f"cielo · {panel}")
    return svg


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        instant = civil_instant(args.when or datetime.now(utc), config.get_timezone())
        dataset = load_dataset(
            config.get_data_dir(), config.get_location(), config.get_star_ra_unit()
        )
        text = render_panel(
            args.panel,
            args.fmt,
            instant,
            dataset,
            antipode=args.antipode,
            lang=args.lang,
            output=args.output,
        )
    except (OSError, DataFormatError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if text is not None:
        _emit(text, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
