import asyncio
import csv
import io
import json
from datetime import datetime

import httpx
import pytest
from pytz import utc

from exoai.batch import (
    CSV_COLUMNS,
    chunked,
    classify_batch,
    render_csv,
    results_filename,
    run_batch,
    summarize_batch,
)
from exoai.errors import NoDataError
from exoai.models import BatchProgress


class _FakeService:
    """Async classifier stand-in that fails chosen rows and tracks concurrency."""

    def __init__(self, make_body, fail_periods=(), status=500, crash_periods=()):
        self.make_body = make_body
        self.fail_periods = set(fail_periods)
        self.crash_periods = set(crash_periods)
        self.status = status
        self.calls = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        data = json.loads(request.content)["stellar_data"]
        self.calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0.01)
        self.in_flight -= 1
        if data["pl_orbper"] in self.crash_periods:
            raise RuntimeError("connection pool exhausted")
        if data["pl_orbper"] in self.fail_periods:
            return httpx.Response(self.status)
        return httpx.Response(200, json=self.make_body(data, data["pl_orbper"] % 2 == 1))


def _records(n: int) -> list[dict]:
    # pl_orbper doubles as a row tag the fake service can see
    return [{"kepoi_name": f"K{i:05d}.01", "pl_orbper": float(i + 1)} for i in range(n)]


def _run(service: _FakeService, records, **kwargs):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(service)) as client:
            return await classify_batch(records, client=client, **kwargs)

    return asyncio.run(go())


def test_chunked_preserves_order():
    groups = chunked(["a", "b", "c", "d", "e", "f", "g"], 5)

    assert [[i for i, _ in g] for g in groups] == [[0, 1, 2, 3, 4], [5, 6]]
    assert groups[1][1] == (6, "g")


def test_chunked_rejects_non_positive_size():
    with pytest.raises(ValueError):
        chunked(["a"], 0)


@pytest.mark.parametrize("n", [1, 5, 7, 12])
def test_one_result_per_row_with_contiguous_indices(make_body, n):
    results = _run(_FakeService(make_body, fail_periods={2.0}), _records(n))

    assert len(results) == n
    assert [r.row_index for r in results] == list(range(n))


def test_failed_row_does_not_affect_others(make_body):
    service = _FakeService(make_body, fail_periods={4.0})

    results = _run(service, _records(7))

    assert [r.success for r in results] == [True, True, True, False, True, True, True]
    failed = results[3]
    assert failed.response is None
    assert failed.error == "API Error: 500 Internal Server Error"
    assert failed.name == "K00003.01"
    assert all(r.response is not None and r.error is None for r in results if r.success)


def test_unexpected_error_settles_only_its_row(make_body):
    # Row 6 sits in the second group; the first group's results must survive
    service = _FakeService(make_body, crash_periods={7.0})

    results = _run(service, _records(7))

    assert len(results) == 7
    assert [r.success for r in results] == [True] * 6 + [False]
    assert results[6].error == "RuntimeError: connection pool exhausted"
    assert "FAILED" in render_csv(results).splitlines()[-1]


def test_all_rows_failing_still_yields_every_row(make_body):
    records = _records(6)
    service = _FakeService(make_body, fail_periods={r["pl_orbper"] for r in records}, status=502)

    results = _run(service, records)

    assert len(results) == 6
    assert not any(r.success for r in results)


def test_progress_is_reported_per_group(make_body):
    progress: list[BatchProgress] = []

    _run(_FakeService(make_body), _records(12), on_progress=progress.append)

    assert [(p.completed, p.total) for p in progress] == [(5, 12), (10, 12), (12, 12)]


def test_in_flight_calls_bounded_by_group_size(make_body):
    service = _FakeService(make_body)

    _run(service, _records(13), group_size=5)

    assert service.calls == 13
    assert service.max_in_flight == 5


def test_empty_batch_fails_before_any_call(make_body):
    service = _FakeService(make_body)

    with pytest.raises(NoDataError):
        _run(service, [])

    assert service.calls == 0


def test_run_batch_uses_mock_service(monkeypatch):
    monkeypatch.setenv("EXOAI_MOCK_API", "true")
    monkeypatch.setenv("EXOAI_MOCK_DELAY", "0")
    progress: list[BatchProgress] = []

    results = run_batch(_records(7), on_progress=progress.append)

    assert len(results) == 7
    assert all(r.success for r in results)
    assert progress[-1] == BatchProgress(completed=7, total=7)


def test_run_batch_rejects_empty_input():
    with pytest.raises(NoDataError):
        run_batch([])


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_render_csv_layout(make_body):
    results = _run(_FakeService(make_body, fail_periods={2.0}), _records(3))

    rows = _rows(render_csv(results))

    assert rows[0] == list(CSV_COLUMNS)
    assert len(CSV_COLUMNS) == 17
    assert len(rows) == 4
    assert all(len(row) == 17 for row in rows)

    ok = dict(zip(rows[0], rows[1]))
    assert ok["row_index"] == "0"
    assert ok["planet_name"] == "K00000.01"
    assert float(ok["pl_orbper"]) == 1.0
    assert ok["classification"] == "EXOPLANET"
    assert ok["status"] == "SUCCESS"

    failed = dict(zip(rows[0], rows[2]))
    assert failed["classification"] == "ERROR"
    assert failed["status"] == "FAILED"
    assert float(failed["pl_orbper"]) == 0
    assert float(failed["exoplanet_probability_percentage"]) == 0


def test_render_csv_quotes_names_with_commas(make_body):
    records = [{"kepler_name": 'Kepler-90 "h", outer', "pl_orbper": 1.0}]
    results = _run(_FakeService(make_body), records)

    rows = _rows(render_csv(results))

    assert len(rows[1]) == 17
    assert rows[1][1] == 'Kepler-90 "h", outer'


def test_results_filename_embeds_timestamp():
    when = datetime(2025, 10, 4, 21, 7, 3, tzinfo=utc)

    assert results_filename(when) == "exoai_batch_results_20251004_210703.csv"
    assert results_filename().startswith("exoai_batch_results_")


def test_summarize_batch_counts(make_body):
    # Odd periods are exoplanets in the fake service; row 1 (period 2.0) fails
    results = _run(_FakeService(make_body, fail_periods={2.0}), _records(5))

    assert summarize_batch(results) == {
        "total": 5,
        "succeeded": 4,
        "failed": 1,
        "exoplanets": 3,
    }
