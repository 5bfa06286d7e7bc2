"""Matplotlib static PNG renderer for the transit light curve."""

import io

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from exoai.models import SceneParams


def render_light_curve_static(scene: SceneParams, width: float = 10, height: float = 3) -> Figure:
    """Render the light curve as a static matplotlib figure.

    Args:
        scene: Fully derived scene parameters.
        width: Figure width in inches.
        height: Figure height in inches.

    Returns:
        matplotlib Figure object.
    """
    color = "#00ff88" if scene.status == "confirmed" else "#ffeb3b"
    samples = np.clip(np.array(scene.light_curve), 0.990, 1.000)
    frames = np.arange(len(samples))

    fig, ax = plt.subplots(figsize=(width, height))
    fig.patch.set_facecolor("black")
    ax.set_facecolor("black")

    ax.plot(frames, samples, color=color, linewidth=2.0)
    dips = samples < 0.9999
    ax.scatter(frames[dips], samples[dips], color=color, s=12, zorder=2)

    ax.set_ylim(0.990, 1.0005)
    ax.set_yticks([0.990, 0.995, 1.000])
    ax.tick_params(colors="white", labelsize=8)
    ax.grid(axis="y", color="white", alpha=0.15)
    ax.set_xticks([])
    for spine in ax.spines.values():
        spine.set_color((1, 1, 1, 0.4))
    ax.set_title(
        f"{scene.planet_name} · {scene.orbital_period_days:.1f} d · {scene.transit_depth_ppm:.0f} ppm",
        color="white",
        fontsize=10,
        family="monospace",
    )
    return fig


def render_light_curve_png(scene: SceneParams) -> bytes:
    """PNG bytes of the light curve, for a download button."""
    fig = render_light_curve_static(scene)
    buf = io.BytesIO()
    try:
        fig.savefig(buf, format="png", facecolor="black", bbox_inches="tight")
    finally:
        plt.close(fig)
    return buf.getvalue()
