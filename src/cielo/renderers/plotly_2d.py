"""Plotly 2D interactive star chart renderer.

Draws the azimuthal-equidistant sky panel directly in plane units.
Supports wheel zoom and drag panning to explore the sky.
"""

import numpy as np
import plotly.graph_objects as go

from cielo.models import SkyData

_BG = "#0d1b35"
_STAR_COLOR = "#f0e0b0"
_LINE_COLOR = "#c9a96e"

PLOTLY_CONFIG = {"scrollZoom": True, "displayModeBar": False}


def render_plotly_chart(sky_data: SkyData) -> go.Figure:
    """Render SkyData as a Plotly 2D interactive star chart.

    Every star in SkyData is already above the horizon. Constellation lines
    are overlaid as a single trace and labels sit at their centroids.

    Args:
        sky_data: Fully computed sky panel.

    Returns:
        Plotly Figure object.
    """
    stars = sky_data.stars

    # Star size: magnitude → marker size
    mags = np.array([s.source.magnitude for s in stars], dtype=float)
    sizes = np.clip(6 - mags, 1, 8)

    star_trace = go.Scatter(
        x=[s.point.x for s in stars],
        y=[s.point.y for s in stars],
        mode="markers",
        marker=dict(
            size=list(sizes),
            color=_STAR_COLOR,
            opacity=0.9,
            line=dict(width=0),
        ),
        text=[s.source.name or "" for s in stars],
        hoverinfo="text",
        name="stars",
    )

    # Constellation lines: single trace using None separators
    lx: list[float | None] = []
    ly: list[float | None] = []
    for line in sky_data.constellations.lines:
        lx += [p.x for p in line] + [None]
        ly += [p.y for p in line] + [None]

    line_trace = go.Scatter(
        x=lx,
        y=ly,
        mode="lines",
        line=dict(color=_LINE_COLOR, width=1),
        opacity=0.4,
        hoverinfo="skip",
        name="constellations",
    )

    centroids = sky_data.constellations.centroids
    label_trace = go.Scatter(
        x=[c.point.x for c in centroids],
        y=[c.point.y for c in centroids],
        mode="text",
        text=[c.name or c.identifier for c in centroids],
        textfont=dict(color=_LINE_COLOR, size=10),
        opacity=0.5,
        hoverinfo="skip",
        name="labels",
    )

    cardinal_trace = go.Scatter(
        x=[c.point.x for c in sky_data.cardinals],
        y=[c.point.y for c in sky_data.cardinals],
        mode="text",
        text=[c.label for c in sky_data.cardinals],
        textfont=dict(color=_LINE_COLOR, size=14),
        hoverinfo="skip",
        name="cardinals",
    )

    proj = sky_data.projection
    fig = go.Figure(data=[line_trace, label_trace, star_trace, cardinal_trace])
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        width=800,
        height=800,
        dragmode="pan",
        xaxis=dict(
            visible=False,
            range=[0.0, 100.0],
            autorange=False,
            fixedrange=False,
        ),
        # Plane y grows downwards
        yaxis=dict(
            visible=False,
            range=[100.0, 0.0],
            autorange=False,
            fixedrange=False,
        ),
        shapes=[
            dict(
                type="circle",
                xref="x",
                yref="y",
                x0=proj.center_x - proj.scale_x,
                x1=proj.center_x + proj.scale_x,
                y0=proj.center_y - proj.scale_y,
                y1=proj.center_y + proj.scale_y,
                line=dict(color=_LINE_COLOR, width=1),
                opacity=0.5,
                fillcolor="rgba(0,0,0,0)",
            )
        ],
    )
    return fig


def render_plotly_html(sky_data: SkyData) -> str:
    """Render SkyData as a standalone HTML page with wheel zoom enabled."""
    fig = render_plotly_chart(sky_data)
    return fig.to_html(full_html=True, include_plotlyjs="cdn", config=PLOTLY_CONFIG)
