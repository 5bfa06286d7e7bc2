"""Record → payload transform. The one seam between UI state and the remote contract."""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from exoai.models import STELLAR_FIELDS, StellarPayload


def _as_number(value: Any) -> float:
    """Coerce a cell value to float; missing, falsy, NaN, or non-numeric → 0."""
    if not value or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_stellar_payload(record: Mapping[str, Any]) -> StellarPayload:
    """Normalize a candidate record into the ten-field payload.

    Total: never raises. Every field absent from the record, or holding a
    falsy/unparseable value, becomes 0.

    Args:
        record: One candidate row (spreadsheet columns → values).

    Returns:
        StellarPayload with all ten numeric fields populated.
    """
    return StellarPayload(**{name: _as_number(record.get(name)) for name in STELLAR_FIELDS})


def request_body(record: Mapping[str, Any]) -> dict[str, dict[str, float]]:
    """JSON body for POST /exoplanet/predict."""
    return {"stellar_data": to_stellar_payload(record).to_dict()}


def display_name(record: Mapping[str, Any], fallback: str = "Unknown") -> str:
    """Human-readable candidate name from the first identifier column present."""
    for key in ("kepler_name", "kepoi_name", "pl_name", "toi"):
        value = record.get(key)
        if value is None or (isinstance(value, float) and math.isnan(value)):
            continue
        text = str(value).strip()
        if text:
            return text
    return fallback


def first_number(record: Mapping[str, Any], keys: Iterable[str]) -> float:
    """First non-zero finite number among `keys`, else 0. Never raises."""
    for key in keys:
        number = _as_number(record.get(key))
        if number:
            return number
    return 0.0
