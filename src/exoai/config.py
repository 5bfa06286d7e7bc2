"""Environment-backed settings, read at call time so `.env` changes apply on rerun."""

import os

_TRUTHY = {"1", "true", "yes", "on"}


def api_url() -> str:
    """Base URL of the classification service, without trailing slash."""
    return os.environ.get("EXOAI_API_URL", "http://localhost:8000").rstrip("/")


def api_timeout() -> float:
    return float(os.environ.get("EXOAI_API_TIMEOUT", "30"))


def mock_api_enabled() -> bool:
    return os.environ.get("EXOAI_MOCK_API", "").strip().lower() in _TRUTHY


def mock_delay() -> float:
    """Simulated service latency in seconds for mock mode."""
    return float(os.environ.get("EXOAI_MOCK_DELAY", "2"))


def insights_model() -> str:
    return os.environ.get("EXOAI_INSIGHTS_MODEL", "claude-sonnet-4-6")


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()
