from collections.abc import Callable, Mapping
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def _real_api_env(monkeypatch):
    """Point every test at the default URL with mock mode off."""
    monkeypatch.delenv("EXOAI_MOCK_API", raising=False)
    monkeypatch.delenv("EXOAI_API_URL", raising=False)


def _body(stellar_data: Mapping[str, float], is_exoplanet: bool = True) -> dict[str, Any]:
    label = "EXOPLANET" if is_exoplanet else "NOT_EXOPLANET"
    probability = 93.1 if is_exoplanet else 4.2
    return {
        "message": "Exoplanet classification completed",
        "stellar_object_data": dict(stellar_data),
        "classification_result": {
            "is_exoplanet": is_exoplanet,
            "classification": label,
            "confidence_level": "HIGH",
            "accuracy_percentage": 91.25,
            "exoplanet_probability_percentage": probability,
            "non_exoplanet_probability_percentage": round(100 - probability, 2),
            "prediction_summary": {"result": label, "confidence": "HIGH", "accuracy": "91.25%"},
        },
        "model_accuracy_percentage": 82.4,
    }


@pytest.fixture
def make_body() -> Callable[..., dict[str, Any]]:
    """Build a classifier response body of the real shape."""
    return _body
