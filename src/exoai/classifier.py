"""Remote classification layer — payload POST, response parsing, and status derivation."""

import asyncio
import hashlib
import json
import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from exoai import config
from exoai.errors import ClassificationError, NoDataError
from exoai.insights import validation_issues
from exoai.models import (
    STELLAR_FIELDS,
    AnalysisResult,
    CandidateRecord,
    ClassificationResponse,
    ClassificationResult,
    StellarPayload,
)
from exoai.transform import display_name, request_body

log = logging.getLogger(__name__)

PREDICT_PATH = "/exoplanet/predict"
_HEADERS = {"Content-Type": "application/json"}


def _predict_url() -> str:
    return config.api_url() + PREDICT_PATH


def _check_status(resp: httpx.Response) -> None:
    if not resp.is_success:
        raise ClassificationError(
            f"API Error: {resp.status_code} {resp.reason_phrase}",
            status_code=resp.status_code,
        )


def parse_response(data: Mapping[str, Any]) -> ClassificationResponse:
    """Convert the service's JSON body into a ClassificationResponse.

    Raises:
        ClassificationError: When a required key is missing or mistyped.
    """
    try:
        echo = data.get("stellar_object_data") or {}
        result = data["classification_result"]
        return ClassificationResponse(
            message=str(data.get("message", "")),
            stellar_object_data=StellarPayload(
                **{name: float(echo.get(name) or 0) for name in STELLAR_FIELDS}
            ),
            classification_result=ClassificationResult(
                is_exoplanet=bool(result["is_exoplanet"]),
                classification=str(result.get("classification", "")),
                confidence_level=str(result.get("confidence_level", "")),
                accuracy_percentage=float(result.get("accuracy_percentage") or 0),
                exoplanet_probability_percentage=float(
                    result.get("exoplanet_probability_percentage") or 0
                ),
                non_exoplanet_probability_percentage=float(
                    result.get("non_exoplanet_probability_percentage") or 0
                ),
                prediction_summary=dict(result.get("prediction_summary") or {}),
            ),
            model_accuracy_percentage=float(data.get("model_accuracy_percentage") or 0),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ClassificationError(f"Malformed classifier response: {e}") from e


def _decode(resp: httpx.Response) -> ClassificationResponse:
    _check_status(resp)
    try:
        data = resp.json()
    except ValueError as e:
        raise ClassificationError(f"Classifier returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ClassificationError("Classifier returned a non-object JSON body")
    return parse_response(data)


# --- Mock service ---


def mock_body(stellar_data: Mapping[str, float]) -> dict[str, Any]:
    """Fabricate a response of the real shape for an offline demo.

    Deterministic per payload: the same inputs always produce the same verdict.
    """
    digest = hashlib.sha256(
        json.dumps(dict(stellar_data), sort_keys=True).encode()
    ).digest()
    jitter = digest[0] / 255  # 0..1
    depth = stellar_data.get("pl_trandep", 0)
    radius = stellar_data.get("pl_rade", 0)
    is_exoplanet = 0 < radius < 20 and 50 <= depth <= 50_000
    accuracy = 85 + jitter * 14.96
    probability = 85 + jitter * 15 if is_exoplanet else jitter * 15
    confidence = "VERY_HIGH" if accuracy > 95 else "HIGH" if accuracy > 85 else "MEDIUM"
    label = "EXOPLANET" if is_exoplanet else "NOT_EXOPLANET"
    return {
        "message": "Exoplanet classification completed",
        "stellar_object_data": dict(stellar_data),
        "classification_result": {
            "is_exoplanet": is_exoplanet,
            "classification": label,
            "confidence_level": confidence,
            "accuracy_percentage": round(accuracy, 2),
            "exoplanet_probability_percentage": round(probability, 2),
            "non_exoplanet_probability_percentage": round(100 - probability, 2),
            "prediction_summary": {
                "result": label,
                "confidence": confidence,
                "accuracy": f"{accuracy:.2f}%",
            },
        },
        "model_accuracy_percentage": 82.4,
    }


def _mock_response(request: httpx.Request) -> httpx.Response:
    payload = json.loads(request.content)
    return httpx.Response(200, json=mock_body(payload["stellar_data"]))


def _mock_handler(request: httpx.Request) -> httpx.Response:
    time.sleep(config.mock_delay())
    return _mock_response(request)


async def _amock_handler(request: httpx.Request) -> httpx.Response:
    await asyncio.sleep(config.mock_delay())
    return _mock_response(request)


def make_client() -> httpx.Client:
    """HTTP client for the single-row flow; mock transport when EXOAI_MOCK_API is set."""
    if config.mock_api_enabled():
        return httpx.Client(transport=httpx.MockTransport(_mock_handler))
    return httpx.Client(timeout=config.api_timeout())


def make_async_client() -> httpx.AsyncClient:
    """Async twin of make_client() for the batch pipeline."""
    if config.mock_api_enabled():
        return httpx.AsyncClient(transport=httpx.MockTransport(_amock_handler))
    return httpx.AsyncClient(timeout=config.api_timeout())


# --- Remote call ---


def classify(
    record: Mapping[str, Any], client: httpx.Client | None = None
) -> ClassificationResponse:
    """POST one record to the classifier and return the parsed response.

    No retry: a failed call surfaces immediately.

    Args:
        record: Candidate row; routed through the payload transform.
        client: Optional preconfigured client (tests inject a mock transport).

    Returns:
        Parsed ClassificationResponse.

    Raises:
        ClassificationError: On non-2xx status, network failure, or bad body.
    """
    body = request_body(record)
    log.debug("POST %s %s", PREDICT_PATH, body)
    owns_client = client is None
    client = client or make_client()
    try:
        resp = client.post(_predict_url(), json=body, headers=_HEADERS)
    except httpx.HTTPError as e:
        raise ClassificationError(f"Could not reach classifier: {e}") from e
    finally:
        if owns_client:
            client.close()
    response = _decode(resp)
    log.info(
        "Classified %s: %s (%s)",
        display_name(record),
        response.classification_result.classification,
        response.classification_result.confidence_level,
    )
    return response


async def aclassify(
    record: Mapping[str, Any], client: httpx.AsyncClient
) -> ClassificationResponse:
    """Async variant of classify() sharing the same request and response contract."""
    body = request_body(record)
    log.debug("POST %s %s", PREDICT_PATH, body)
    try:
        resp = await client.post(_predict_url(), json=body, headers=_HEADERS)
    except httpx.HTTPError as e:
        raise ClassificationError(f"Could not reach classifier: {e}") from e
    return _decode(resp)


def analyze_record(
    record: CandidateRecord | None, client: httpx.Client | None = None
) -> AnalysisResult:
    """Single-row analysis: classify the selected record and derive its status.

    Raises:
        NoDataError: If no record is loaded. No network call is made.
        ClassificationError: On any remote failure.
    """
    if record is None:
        raise NoDataError("No data to analyze. Please load a file first.")

    response = classify(record, client=client)
    verdict = response.classification_result
    status = "confirmed" if verdict.is_exoplanet else "false_positive"
    return AnalysisResult(
        status=status,
        confidence=verdict.accuracy_percentage,
        planet_name=display_name(record),
        record=record,
        response=response,
        issues=tuple(validation_issues(record)) if status == "false_positive" else (),
    )
