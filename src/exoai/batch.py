"""Batch classification pipeline — bounded-concurrency groups, per-row isolation, CSV export."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import datetime

import httpx
import pandas as pd
from pytz import utc

from exoai.classifier import aclassify, make_async_client
from exoai.errors import ClassificationError, NoDataError
from exoai.models import STELLAR_FIELDS, BatchProgress, BatchResult, CandidateRecord
from exoai.transform import display_name

log = logging.getLogger(__name__)

GROUP_SIZE = 5

CSV_COLUMNS: tuple[str, ...] = (
    "row_index",
    "planet_name",
    *STELLAR_FIELDS,
    "classification",
    "confidence_level",
    "exoplanet_probability_percentage",
    "non_exoplanet_probability_percentage",
    "status",
)

ProgressCallback = Callable[[BatchProgress], None]


def chunked(records: Sequence[CandidateRecord], size: int) -> list[list[tuple[int, CandidateRecord]]]:
    """Split records into order-preserving groups of (row_index, record)."""
    if size < 1:
        raise ValueError(f"group size must be positive, got {size}")
    indexed = list(enumerate(records))
    return [indexed[i : i + size] for i in range(0, len(indexed), size)]


async def _classify_row(
    row_index: int, record: CandidateRecord, client: httpx.AsyncClient
) -> BatchResult:
    """Classify one row, capturing its failure instead of propagating it."""
    name = display_name(record, fallback=f"Row {row_index + 1}")
    response = None
    error = None
    try:
        response = await aclassify(record, client)
    except ClassificationError as e:
        log.warning("Row %s (%s) failed: %s", row_index, name, e)
        error = str(e)
    except Exception as e:
        # Any other failure still settles the row so finished groups are kept
        log.exception("Row %s (%s) failed unexpectedly", row_index, name)
        error = f"{type(e).__name__}: {e}"
    return BatchResult(
        row_index=row_index,
        name=name,
        record=record,
        response=response,
        error=error,
        success=error is None,
        timestamp=datetime.now(utc),
    )


async def classify_batch(
    records: Sequence[CandidateRecord],
    *,
    group_size: int = GROUP_SIZE,
    on_progress: ProgressCallback | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[BatchResult]:
    """Classify every record, at most `group_size` requests in flight at once.

    Each group's rows are sent concurrently; the next group starts only after
    every row of the current group has settled. A row's failure is recorded
    as a failed BatchResult and never aborts the batch.

    Args:
        records: Candidate rows in input order.
        group_size: Rows per concurrent group.
        on_progress: Called after each group with (completed, total).
        client: Async HTTP client; one is created (and closed) when omitted.

    Returns:
        One BatchResult per input row, ordered by row index.

    Raises:
        NoDataError: If `records` is empty. No network call is made.
    """
    if not records:
        raise NoDataError("No rows to analyze. Please load a file with data.")

    total = len(records)
    groups = chunked(records, group_size)
    owns_client = client is None
    client = client or make_async_client()
    results: list[BatchResult] = []
    try:
        for n, group in enumerate(groups, start=1):
            settled = await asyncio.gather(
                *(_classify_row(i, record, client) for i, record in group)
            )
            results.extend(settled)
            log.info("Batch group %s/%s done (%s/%s rows)", n, len(groups), len(results), total)
            if on_progress is not None:
                on_progress(BatchProgress(completed=len(results), total=total))
    finally:
        if owns_client:
            await client.aclose()
    return results


def run_batch(
    records: Sequence[CandidateRecord],
    *,
    group_size: int = GROUP_SIZE,
    on_progress: ProgressCallback | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[BatchResult]:
    """Blocking entry point for classify_batch(), for use from the Streamlit script."""
    return asyncio.run(
        classify_batch(records, group_size=group_size, on_progress=on_progress, client=client)
    )


def _csv_row(result: BatchResult) -> list[object]:
    if result.success and result.response is not None:
        verdict = result.response.classification_result
        echo = result.response.stellar_object_data.to_dict()
        return [
            result.row_index,
            result.name,
            *(echo[name] for name in STELLAR_FIELDS),
            verdict.classification,
            verdict.confidence_level,
            verdict.exoplanet_probability_percentage,
            verdict.non_exoplanet_probability_percentage,
            "SUCCESS",
        ]
    return [
        result.row_index,
        result.name,
        *(0 for _ in STELLAR_FIELDS),
        "ERROR",
        "ERROR",
        0,
        0,
        "FAILED",
    ]


def render_csv(results: Sequence[BatchResult]) -> str:
    """Render batch results as CSV text with the fixed 17-column header.

    Fields containing commas, quotes or newlines are quoted.
    """
    frame = pd.DataFrame(
        [_csv_row(r) for r in sorted(results, key=lambda r: r.row_index)],
        columns=list(CSV_COLUMNS),
    )
    return frame.to_csv(index=False, lineterminator="\n")


def results_filename(now: datetime | None = None) -> str:
    """Download name with an embedded UTC timestamp."""
    now = now or datetime.now(utc)
    return f"exoai_batch_results_{now.strftime('%Y%m%d_%H%M%S')}.csv"


def summarize_batch(results: Sequence[BatchResult]) -> dict[str, int]:
    """Counts shown in the completion notification."""
    succeeded = [r for r in results if r.success and r.response is not None]
    return {
        "total": len(results),
        "succeeded": len(succeeded),
        "failed": len(results) - len(succeeded),
        "exoplanets": sum(
            1 for r in succeeded if r.response.classification_result.is_exoplanet  # type: ignore[union-attr]
        ),
    }
