"""Data model definitions — explicit boundaries between input, remote call, batch, and render layers."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

# One spreadsheet row. Keys are column names; values are numbers, strings or None.
CandidateRecord = dict[str, Any]

AnalysisStatus = Literal["initial", "analyzing", "confirmed", "false_positive"]

STELLAR_FIELDS: tuple[str, ...] = (
    "pl_orbper",
    "pl_trandurh",
    "pl_trandep",
    "pl_rade",
    "pl_insol",
    "pl_eqt",
    "st_tmag",
    "st_teff",
    "st_logg",
    "st_rad",
)


@dataclass(frozen=True)
class StellarPayload:
    """The fixed-shape numeric payload sent to the classifier."""

    pl_orbper: float = 0.0  # Orbital period (days)
    pl_trandurh: float = 0.0  # Transit duration (hours)
    pl_trandep: float = 0.0  # Transit depth (ppm)
    pl_rade: float = 0.0  # Planet radius (Earth radii)
    pl_insol: float = 0.0  # Insolation flux (Earth flux)
    pl_eqt: float = 0.0  # Equilibrium temperature (K)
    st_tmag: float = 0.0  # TESS magnitude
    st_teff: float = 0.0  # Stellar effective temperature (K)
    st_logg: float = 0.0  # Stellar surface gravity (log10 cm/s²)
    st_rad: float = 0.0  # Stellar radius (solar radii)

    def to_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in STELLAR_FIELDS}


@dataclass(frozen=True)
class ClassificationResult:
    """Verdict section of the classifier response."""

    is_exoplanet: bool
    classification: str  # "EXOPLANET" | "NOT_EXOPLANET"
    confidence_level: str  # "VERY_HIGH" | "HIGH" | "MEDIUM" | ...
    accuracy_percentage: float
    exoplanet_probability_percentage: float
    non_exoplanet_probability_percentage: float
    prediction_summary: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ClassificationResponse:
    """Full classifier response. Read-through; never mutated."""

    message: str
    stellar_object_data: StellarPayload  # Echo of the submitted payload
    classification_result: ClassificationResult
    model_accuracy_percentage: float


@dataclass(frozen=True)
class ValidationIssue:
    """A reason a candidate may be a false positive, with a follow-up hint."""

    title: str
    value: str
    recommendation: str


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of a single-row analysis, as shown in the results dialog."""

    status: Literal["confirmed", "false_positive"]
    confidence: float  # Accuracy percentage reported by the service
    planet_name: str
    record: CandidateRecord
    response: ClassificationResponse
    issues: tuple[ValidationIssue, ...] = ()
    similar_to: str | None = None  # Filled in by the insights service
    suggestions_summary: str | None = None


@dataclass(frozen=True)
class BatchResult:
    """One settled row of a batch run. Exactly one of response/error is set."""

    row_index: int  # Position of the source row in the input
    name: str  # Display name derived from the record
    record: CandidateRecord
    response: ClassificationResponse | None
    error: str | None
    success: bool
    timestamp: datetime  # UTC, when the row's call settled


@dataclass(frozen=True)
class BatchProgress:
    completed: int
    total: int


@dataclass(frozen=True)
class SpectralClass:
    """Stellar spectral-class bucket."""

    name: str  # "L/T", "M", "K", "G", "F", "A", "B", "O"
    upper_teff: float  # Exclusive upper temperature bound (K); inf for O
    color: str  # Hex display colour
    color_name: str


@dataclass(frozen=True)
class PlanetType:
    """Planet type bucket derived from radius band and warmth."""

    name: str
    color: str  # Hex display colour
    gas_giant: bool  # Neptune-like or larger: rendered matte


@dataclass(frozen=True)
class SceneParams:
    """The sole input to renderers. Fully derived from one record and a status."""

    planet_name: str
    status: AnalysisStatus
    spectral_class: SpectralClass
    planet_type: PlanetType
    star_size: float  # Scene units
    planet_size: float  # Scene units
    orbit_radius: float  # Scene units
    semi_major_axis_au: float
    orbital_period_days: float
    transit_depth_ppm: float
    stellar_teff: float
    planet_positions: tuple[tuple[float, float, float], ...]  # One (x, y, z) per frame
    light_curve: tuple[float, ...]  # Brightness per frame, 1.0 = unobstructed
