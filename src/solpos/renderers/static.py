"""Matplotlib static PNG renderer for a day's sun path."""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from solpos.config import RESULTS_DIR  # noqa: E402
from solpos.models import SunPathPoint  # noqa: E402

_BG = "#0d1b35"
_PATH_COLOR = "#f0c050"
_ETR_COLOR = "#7ec8e3"
_HORIZON_COLOR = "#c9a96e"


def render_static_chart(
    points: tuple[SunPathPoint, ...], title: str = "", chart_size: int = 10
) -> Figure:
    """Render a sun path as elevation-vs-azimuth plus ETR-vs-time panels.

    Args:
        points: Samples from ``sun_path``.
        title: Figure title.
        chart_size: Figure width in inches.

    Returns:
        matplotlib Figure object.
    """
    azim = np.array([p.azim for p in points])
    elev = np.array([p.elevref for p in points])
    hours = np.array([p.minutes for p in points]) / 60.0
    etr = np.array([p.etr for p in points])
    etrtilt = np.array([p.etrtilt for p in points])

    fig, (ax_path, ax_etr) = plt.subplots(2, 1, figsize=(chart_size, chart_size * 0.8))
    fig.patch.set_facecolor(_BG)

    # Only the part of the path above the horizon
    up = np.where(elev >= 0.0, elev, np.nan)
    ax_path.plot(azim, up, color=_PATH_COLOR, linewidth=1.5)
    ax_path.scatter(azim, up, s=6, color=_PATH_COLOR, zorder=2)
    ax_path.axhline(0.0, color=_HORIZON_COLOR, linewidth=0.8)
    ax_path.set_xlim(0, 360)
    ax_path.set_ylim(0, 90)
    ax_path.set_xticks([0, 90, 180, 270, 360], ["N", "E", "S", "W", "N"])
    ax_path.set_ylabel("Elevation (deg)")

    ax_etr.plot(hours, etr, color=_ETR_COLOR, linewidth=1.2, label="ETR horizontal")
    ax_etr.plot(hours, etrtilt, color=_PATH_COLOR, linewidth=1.2, label="ETR tilted")
    ax_etr.set_xlim(0, 24)
    ax_etr.set_xlabel("Local standard time (h)")
    ax_etr.set_ylabel("W/m²")
    ax_etr.legend(loc="upper right", fontsize=8)

    for ax in (ax_path, ax_etr):
        ax.set_facecolor(_BG)
        ax.tick_params(colors="white")
        ax.xaxis.label.set_color("white")
        ax.yaxis.label.set_color("white")
        for spine in ax.spines.values():
            spine.set_color("#334466")

    if title:
        fig.suptitle(title, color="white")
    fig.tight_layout()
    return fig


def save_static_chart(
    points: tuple[SunPathPoint, ...], output_path: Path | None = None, title: str = ""
) -> Path:
    """Save a sun path chart as a PNG file.

    Args:
        points: Samples from ``sun_path``.
        output_path: Destination path. Auto-generated under results/ if None.
        title: Figure title, also used for the auto-generated filename.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        filename = f"{title or 'sun_path'}.png".replace(" ", "_").replace(":", "_")
        output_path = RESULTS_DIR / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(points, title=title)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path
