"""Matplotlib static PNG renderer."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from cielo.models import SkyData


def render_static_chart(sky_data: SkyData, chart_size: int = 10) -> Figure:
    """Render SkyData as a static matplotlib image.

    Args:
        sky_data: Fully computed sky panel.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    proj = sky_data.projection
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor("black")
    ax.set_facecolor("black")

    border = Circle(
        (proj.center_x, proj.center_y), proj.scale_x, color="#0d1b35", fill=True
    )
    ax.add_patch(border)

    for line in sky_data.constellations.lines:
        ax.plot(
            [p.x for p in line],
            [p.y for p in line],
            color="#c9a96e",
            linewidth=0.5,
            alpha=0.6,
            linestyle="--",
            zorder=1,
        )

    x_vals = np.array([s.point.x for s in sky_data.stars])
    y_vals = np.array([s.point.y for s in sky_data.stars])
    mags = np.array([s.source.magnitude for s in sky_data.stars])

    marker_size = 100 * 10 ** (mags / -2.5)
    ax.scatter(
        x_vals, y_vals, s=marker_size, color="white", marker=".", linewidths=0, zorder=2
    )

    for c in sky_data.cardinals:
        ax.text(
            c.point.x, c.point.y, c.label,
            color="#c9a96e", ha="center", va="center", fontsize=14, zorder=3,
        )

    horizon = Circle(
        (proj.center_x, proj.center_y), radius=proj.scale_x, transform=ax.transData
    )
    for col in ax.collections:
        col.set_clip_path(horizon)

    ax.set_xlim(0, 100)
    # Plane y grows downwards
    ax.set_ylim(100, 0)
    ax.set_aspect(proj.scale_x / proj.scale_y)
    ax.axis("off")

    return fig


def save_static_chart(sky_data: SkyData, output_path: Path | None = None) -> Path:
    """Save SkyData as a PNG file.

    Args:
        sky_data: Fully computed sky panel.
        output_path: Destination path. Auto-generated under results/ in the
            current working directory if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        place = sky_data.observer.name or "sky"
        when_str = sky_data.when.replace(":", "_")
        filename = f"{place}__{sky_data.hemisphere.value}__{when_str}.png".replace(" ", "_")
        output_path = Path.cwd() / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(sky_data)
    fig.savefig(output_path, facecolor="black")
    plt.close(fig)
    return output_path
