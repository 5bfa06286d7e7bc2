"""Plotly 3D star/planet scene and light-curve chart.

The planet orbits the star through Plotly animation frames; the light curve
is the brightness the camera would record over the same frames.
"""

import numpy as np
import plotly.graph_objects as go

from exoai.models import SceneParams
from exoai.scene import CAMERA_Z, STATUS_STYLES

_BG = "#050a1a"
_STARFIELD_COLOR = "#ffffff"
_GRID_COLOR = "rgba(255,255,255,0.15)"
_CURVE_DEFAULT = "#ffeb3b"
_CURVE_CONFIRMED = "#00ff88"
_CURVE_RANGE = (0.990, 1.000)
_FRAME_MS = 300  # 200 frames ≈ one 60 s orbit


def _sphere(radius: float, color: str, resolution: int = 32) -> go.Surface:
    u = np.linspace(0, 2 * np.pi, resolution)
    v = np.linspace(0, np.pi, resolution)
    x = radius * np.outer(np.cos(u), np.sin(v))
    y = radius * np.outer(np.sin(u), np.sin(v))
    z = radius * np.outer(np.ones_like(u), np.cos(v))
    return go.Surface(
        x=x,
        y=y,
        z=z,
        colorscale=[[0, color], [1, color]],
        showscale=False,
        hoverinfo="skip",
        lighting=dict(ambient=0.9, diffuse=0.3),
        name="star",
    )


def _starfield(count: int = 1500, extent: float = 60.0, seed: int = 12345) -> go.Scatter3d:
    # Seeded so the background doesn't jump between reruns
    rng = np.random.default_rng(seed)
    points = (rng.random((count, 3)) - 0.5) * 2 * extent
    points = points[np.linalg.norm(points, axis=1) > 12]
    return go.Scatter3d(
        x=points[:, 0],
        y=points[:, 1],
        z=points[:, 2],
        mode="markers",
        marker=dict(size=1.2, color=_STARFIELD_COLOR, opacity=0.6),
        hoverinfo="skip",
        name="starfield",
    )


def _planet_marker(scene: SceneParams, frame: int) -> go.Scatter3d:
    style = STATUS_STYLES[scene.status]
    x, y, z = scene.planet_positions[frame]
    # Scatter3d marker size is in pixels; scale scene units into a visible range
    size = max(6.0, scene.planet_size * 40)
    return go.Scatter3d(
        x=[x],
        y=[y],
        z=[z],
        mode="markers",
        marker=dict(
            size=size,
            color=scene.planet_type.color,
            opacity=style.opacity,
            line=dict(color=style.glow_color or scene.planet_type.color, width=4),
        ),
        hovertemplate=f"{scene.planet_name}<br>{scene.planet_type.name}<extra></extra>",
        name="planet",
    )


def render_scene(scene: SceneParams) -> go.Figure:
    """Render SceneParams as an animated Plotly 3D figure.

    Trace order is fixed (starfield, star, planet) so animation frames only
    replace the planet trace.

    Args:
        scene: Fully derived scene parameters.

    Returns:
        Plotly Figure with a play/pause control.
    """
    planet_index = 2
    fig = go.Figure(
        data=[
            _starfield(),
            _sphere(scene.star_size, scene.spectral_class.color),
            _planet_marker(scene, 0),
        ],
        frames=[
            go.Frame(data=[_planet_marker(scene, i)], traces=[planet_index], name=str(i))
            for i in range(len(scene.planet_positions))
        ],
    )

    axis = dict(visible=False, range=[-12, 12], autorange=False)
    # Plotly camera eye is in normalized scene units; mirror the (0, 3, -15) viewpoint
    eye_z = CAMERA_Z / 10
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=520,
        scene=dict(
            xaxis=axis,
            yaxis=axis,
            zaxis=axis,
            aspectmode="cube",
            bgcolor=_BG,
            camera=dict(eye=dict(x=0, y=0.3, z=eye_z), up=dict(x=0, y=1, z=0)),
        ),
        updatemenus=[
            dict(
                type="buttons",
                showactive=False,
                x=0.02,
                y=0.05,
                xanchor="left",
                buttons=[
                    dict(
                        label="▶",
                        method="animate",
                        args=[
                            None,
                            dict(
                                frame=dict(duration=_FRAME_MS, redraw=True),
                                transition=dict(duration=0),
                                fromcurrent=True,
                                mode="immediate",
                            ),
                        ],
                    ),
                    dict(
                        label="❚❚",
                        method="animate",
                        args=[[None], dict(frame=dict(duration=0, redraw=False), mode="immediate")],
                    ),
                ],
            )
        ],
    )
    return fig


def render_light_curve(scene: SceneParams) -> go.Figure:
    """Light curve over one orbit on a fixed 0.990–1.000 scale, transit dips marked."""
    color = _CURVE_CONFIRMED if scene.status == "confirmed" else _CURVE_DEFAULT
    low, high = _CURVE_RANGE
    samples = np.clip(np.array(scene.light_curve), low, high)
    frames = np.arange(len(samples))
    dips = samples < 0.9999

    fig = go.Figure(
        data=[
            go.Scatter(
                x=frames,
                y=samples,
                mode="lines",
                line=dict(color=color, width=2.5),
                hoverinfo="skip",
                name="brightness",
            ),
            go.Scatter(
                x=frames[dips],
                y=samples[dips],
                mode="markers",
                marker=dict(color=color, size=6),
                hovertemplate="%{y:.6f}<extra></extra>",
                name="transit",
            ),
        ]
    )
    fig.update_layout(
        title=dict(text="LIGHT CURVE", x=0.5, font=dict(family="monospace", size=14, color="#ffffff")),
        paper_bgcolor="rgba(0,0,0,0.95)",
        plot_bgcolor="rgba(0,0,0,0.95)",
        showlegend=False,
        height=180,
        margin=dict(l=50, r=20, t=35, b=30),
        font=dict(family="monospace", size=11, color="#e8e8e8"),
        xaxis=dict(visible=False),
        yaxis=dict(
            range=[low, high],
            tickvals=[0.990, 0.995, 1.000],
            tickformat=".3f",
            gridcolor=_GRID_COLOR,
            zeroline=False,
        ),
        annotations=[
            dict(
                text=f"Period: {scene.orbital_period_days:.1f}d · Depth: {scene.transit_depth_ppm:.0f} ppm",
                xref="paper",
                yref="paper",
                x=0,
                y=-0.12,
                showarrow=False,
                xanchor="left",
                font=dict(size=10),
            )
        ],
    )
    return fig
