"""Visualization parameter derivation — star/planet buckets, orbit geometry, and the transit light curve.

Everything here is deterministic and decorative: the numbers only drive the
3D scene and light-curve chart, they are not scientific output.
"""

import bisect
import logging
import math
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from exoai.models import AnalysisStatus, PlanetType, SceneParams, SpectralClass
from exoai.transform import display_name, first_number

log = logging.getLogger(__name__)

STAR_SIZE = 2.5  # Scene units; every other size is relative to this
EARTH_RADII_PER_SOLAR_RADIUS = 109.2
CAMERA_Z = -15.0  # Camera sits behind the orbit plane looking toward the star
ORBIT_RADIUS_RANGE = (3.5, 8.0)
ORBIT_SCALE = 5.0  # Scene units per AU before clamping
SCALED_PERIOD_S = 60.0  # Every orbit is animated over one minute
FRAMES_PER_ORBIT = 200
LIGHT_CURVE_POINTS = 200

_DEFAULT_TEFF = 5778.0
_DEFAULT_RADIUS_RE = 1.0
_DEFAULT_PERIOD_D = 10.0
_DEFAULT_DEPTH_PPM = 0.01
_DEFAULT_TEQ = 300.0

# Ordered by exclusive upper temperature bound (K)
SPECTRAL_CLASSES: tuple[SpectralClass, ...] = (
    SpectralClass("L/T", 2400, "#d32f2f", "Dark Red"),
    SpectralClass("M", 3700, "#ff5722", "Red-Orange"),
    SpectralClass("K", 5200, "#ff9800", "Orange"),
    SpectralClass("G", 6000, "#ffeb3b", "Yellow"),
    SpectralClass("F", 7500, "#ffffe0", "Yellow-White"),
    SpectralClass("A", 10000, "#fafafa", "White"),
    SpectralClass("B", 30000, "#64b5f6", "Blue-White"),
    SpectralClass("O", math.inf, "#2196f3", "Blue"),
)
_SPECTRAL_BOUNDS = [c.upper_teff for c in SPECTRAL_CLASSES]

# Radius bands (exclusive upper bound, R⊕) → warmth rows checked in order.
# A warmth row is (teq_low, teq_high, type), matched when low < teq < high.
# The last band and the last row of each band also catch everything else.
_PLANET_TYPES: tuple[tuple[float, tuple[tuple[float, float, PlanetType], ...]], ...] = (
    (
        1.5,
        (
            (600, math.inf, PlanetType("Hot Rocky", "#c62828", False)),
            (273, 373, PlanetType("Earth-like", "#1976d2", False)),
            (-math.inf, math.inf, PlanetType("Cold Rocky", "#5d4037", False)),
        ),
    ),
    (
        3.5,
        (
            (1000, math.inf, PlanetType("Hot Super-Earth", "#e64a19", False)),
            (400, math.inf, PlanetType("Warm Super-Earth", "#f57c00", False)),
            (-math.inf, math.inf, PlanetType("Cold Super-Earth", "#1976d2", False)),
        ),
    ),
    (
        8.0,
        (
            (1000, math.inf, PlanetType("Hot Neptune", "#d84315", True)),
            (400, math.inf, PlanetType("Warm Neptune", "#00838f", True)),
            (-math.inf, math.inf, PlanetType("Neptune-like", "#0d47a1", True)),
        ),
    ),
    (
        math.inf,
        (
            (1500, math.inf, PlanetType("Hot Jupiter", "#bf360c", True)),
            (1000, math.inf, PlanetType("Warm Jupiter", "#f57f17", True)),
            (-math.inf, math.inf, PlanetType("Jupiter-like", "#6d4c41", True)),
        ),
    ),
)


@dataclass(frozen=True)
class StatusStyle:
    planet_color: str
    orbit_color: str
    opacity: float
    glow_color: str | None  # Emissive tint; None = no glow


STATUS_STYLES: dict[str, StatusStyle] = {
    "initial": StatusStyle("#aaaaaa", "#666666", 0.7, None),
    "analyzing": StatusStyle("#aaaaaa", "#666666", 1.0, None),
    "confirmed": StatusStyle("#00ff88", "#00ff88", 1.0, "#00ff88"),
    "false_positive": StatusStyle("#ff3366", "#ff3366", 0.5, "#ff3366"),
}


def spectral_class(teff: float) -> SpectralClass:
    """Spectral-class bucket whose temperature band contains `teff`."""
    index = bisect.bisect_right(_SPECTRAL_BOUNDS, teff)
    return SPECTRAL_CLASSES[min(index, len(SPECTRAL_CLASSES) - 1)]


def planet_type(radius_re: float, teq: float) -> PlanetType:
    """Planet type for a radius (Earth radii) and equilibrium temperature (K)."""
    for upper_radius, rows in _PLANET_TYPES:
        if radius_re < upper_radius:
            break
    for low, high, kind in rows[:-1]:
        if low < teq < high:
            return kind
    return rows[-1][2]


def semi_major_axis_au(period_days: float, stellar_mass: float = 1.0) -> float:
    """Kepler's third law, a³ = P²·M with P in years and a in AU."""
    period_years = period_days / 365.25
    return (period_years * period_years * stellar_mass) ** (1 / 3)


def orbit_radius(period_days: float) -> float:
    """Scene orbit radius, clamped so every orbit fits the camera frame."""
    low, high = ORBIT_RADIUS_RANGE
    return max(low, min(semi_major_axis_au(period_days) * ORBIT_SCALE, high))


def planet_scene_size(radius_re: float, stellar_radius_rsun: float) -> float:
    """Planet sphere radius in scene units, scaled relative to the star and kept visible."""
    planet_rsun = radius_re / EARTH_RADII_PER_SOLAR_RADIUS
    return max(0.1, STAR_SIZE * (planet_rsun / stellar_radius_rsun) * 1.5)


def transit_brightness(
    position: tuple[float, float, float],
    planet_size: float,
    depth_ppm: float,
    star_size: float = STAR_SIZE,
) -> float:
    """Relative stellar flux seen by the camera for one planet position.

    The planet transits when it is between camera and star (z < 0) and its
    projected disk overlaps the star's. Flux then drops by depth_ppm / 1e6.
    """
    x, y, z = position
    in_front = z < 0
    overlapping = math.hypot(x, y) < star_size + planet_size
    if in_front and overlapping:
        return 1.0 - depth_ppm / 1_000_000
    return 1.0


class LightCurve:
    """Rolling buffer of the most recent brightness samples."""

    def __init__(self, max_points: int = LIGHT_CURVE_POINTS) -> None:
        self._samples: deque[float] = deque(maxlen=max_points)

    def push(self, brightness: float) -> None:
        self._samples.append(brightness)

    def extend(self, values: Iterable[float]) -> None:
        self._samples.extend(values)

    @property
    def samples(self) -> tuple[float, ...]:
        return tuple(self._samples)

    @property
    def current(self) -> float | None:
        return self._samples[-1] if self._samples else None

    def __len__(self) -> int:
        return len(self._samples)


def orbit_positions(
    radius: float, frames: int = FRAMES_PER_ORBIT
) -> tuple[tuple[float, float, float], ...]:
    """Planet (x, y, z) for each frame of one scaled orbit, counter-clockwise from above."""
    speed = 2 * math.pi / SCALED_PERIOD_S
    step = SCALED_PERIOD_S / frames
    positions = []
    for i in range(frames):
        angle = -(i * step * speed)
        positions.append((math.cos(angle) * radius, 0.0, math.sin(angle) * radius))
    return tuple(positions)


def build_scene(record: Mapping[str, Any] | None, status: AnalysisStatus = "initial") -> SceneParams:
    """Derive every scene parameter for a record.

    Args:
        record: Selected candidate, or None for the placeholder scene.
        status: Current analysis status; drives styling only.

    Returns:
        SceneParams with per-frame planet positions and light curve.
    """
    record = record or {}
    stellar_radius = first_number(record, ("st_rad",)) or 1.0
    teff = first_number(record, ("st_teff", "koi_steff")) or _DEFAULT_TEFF
    radius_re = first_number(record, ("pl_rade", "koi_prad")) or _DEFAULT_RADIUS_RE
    period = first_number(record, ("pl_orbper", "koi_period")) or _DEFAULT_PERIOD_D
    depth = first_number(record, ("pl_trandep", "koi_depth")) or _DEFAULT_DEPTH_PPM
    teq = first_number(record, ("pl_eqt", "koi_teq")) or _DEFAULT_TEQ

    planet_size = planet_scene_size(radius_re, stellar_radius)
    radius = orbit_radius(period)
    positions = orbit_positions(radius)

    curve = LightCurve()
    curve.extend(transit_brightness(p, planet_size, depth) for p in positions)

    scene = SceneParams(
        planet_name=display_name(record),
        status=status,
        spectral_class=spectral_class(teff),
        planet_type=planet_type(radius_re, teq),
        star_size=STAR_SIZE,
        planet_size=planet_size,
        orbit_radius=radius,
        semi_major_axis_au=semi_major_axis_au(period),
        orbital_period_days=period,
        transit_depth_ppm=depth,
        stellar_teff=teff,
        planet_positions=positions,
        light_curve=curve.samples,
    )
    log.debug(
        "Scene for %s: star %s (%.0f K), planet %s, orbit %.2f units (%.3f AU)",
        scene.planet_name,
        scene.spectral_class.name,
        teff,
        scene.planet_type.name,
        radius,
        scene.semi_major_axis_au,
    )
    return scene
