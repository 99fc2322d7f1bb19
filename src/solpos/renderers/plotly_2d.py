"""Plotly 2D interactive sun path renderer.

Azimuth on x (N-E-S-W-N), refracted elevation on y. Hovering a sample
shows its local time and extraterrestrial irradiance.
"""

import numpy as np
import plotly.graph_objects as go

from solpos.models import SunPathPoint

_BG = "#050a1a"
_PATH_COLOR = "#f0c050"
_HORIZON_COLOR = "#334466"


def _hhmm(minutes: float) -> str:
    h, m = divmod(int(minutes), 60)
    return f"{h:02d}:{m:02d}"


def render_plotly_chart(points: tuple[SunPathPoint, ...], title: str = "") -> go.Figure:
    """Render a sun path as a Plotly figure.

    Samples below the horizon are dropped (None breaks the line there).

    Args:
        points: Samples from ``sun_path``.
        title: Figure title.

    Returns:
        Plotly Figure object.
    """
    elev = np.array([p.elevref for p in points])
    visible = elev >= 0.0

    x_vals: list[float | None] = [p.azim if v else None for p, v in zip(points, visible)]
    y_vals: list[float | None] = [p.elevref if v else None for p, v in zip(points, visible)]
    hover = [
        f"{_hhmm(p.minutes)}<br>azim {p.azim:.1f}°<br>elev {p.elevref:.1f}°"
        f"<br>ETR {p.etr:.0f} W/m²"
        for p in points
    ]

    path_trace = go.Scatter(
        x=x_vals,
        y=y_vals,
        mode="lines+markers",
        line=dict(color=_PATH_COLOR, width=2),
        marker=dict(size=4, color=_PATH_COLOR),
        text=hover,
        hoverinfo="text",
        name="sun path",
    )

    fig = go.Figure(data=[path_trace])
    fig.update_layout(
        title=title or None,
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        font=dict(color="white"),
        showlegend=False,
        margin=dict(l=40, r=10, t=40 if title else 10, b=40),
        xaxis=dict(
            range=[0.0, 360.0],
            tickvals=[0, 90, 180, 270, 360],
            ticktext=["N", "E", "S", "W", "N"],
            gridcolor=_HORIZON_COLOR,
        ),
        yaxis=dict(range=[0.0, 90.0], title="Elevation (deg)", gridcolor=_HORIZON_COLOR),
    )
    return fig
