"""Stub sources for testing the fetcher and orchestrator."""

import asyncio

from edgeboard.constants import SOURCE_LIVE
from edgeboard.exceptions import DataFetchError, LiveFeedError
from edgeboard.ingestion.fetcher import FetchResult, SourcePayload


class StubLiveClient:
    """Live feed stub: returns canned data or raises ``LiveFeedError``."""

    def __init__(self, predictions=None, generated_at="2025-01-05T12:00:00Z",
                 cover_analysis=None, fail=False, fail_results=False, calls=None):
        self._predictions = predictions or []
        self._generated_at = generated_at
        self._cover_analysis = cover_analysis or []
        self._fail = fail
        self._fail_results = fail_results
        self.calls = calls if calls is not None else []

    async def fetch_predictions(self):
        self.calls.append("live.predictions")
        if self._fail:
            raise LiveFeedError("GET /api/predictions/current timed out after 5.0s")
        return {"predictions": list(self._predictions), "generated_at": self._generated_at}

    async def fetch_results(self):
        self.calls.append("live.results")
        if self._fail_results:
            raise LiveFeedError("GET /api/results/current failed", status_code=503)
        return {"cover_analysis": list(self._cover_analysis), "vegas_spread_analysis": []}


class StubSheetsClient:
    """Sheets stub keyed by range name; values may be grids or exceptions."""

    def __init__(self, ranges=None, calls=None):
        self._ranges = ranges or {}
        self.calls = calls if calls is not None else []

    def get_values(self, range_name):
        self.calls.append(f"sheets.{range_name}")
        value = self._ranges.get(range_name, [])
        if isinstance(value, Exception):
            raise value
        return value


class StubFetcher:
    """Fetcher stub for orchestrator tests.

    ``results`` is consumed in order; the last entry repeats. Entries are
    SourcePayload objects, error strings, or exceptions to raise.
    """

    def __init__(self, results, gate=None):
        self._results = list(results)
        self._gate = gate
        self.calls = 0

    async def fetch_result(self):
        self.calls += 1
        if self._gate is not None:
            await self._gate.wait()
        else:
            await asyncio.sleep(0)
        index = min(self.calls - 1, len(self._results) - 1)
        outcome = self._results[index]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, str):
            return FetchResult.failure(outcome)
        return FetchResult.success(outcome)


def make_payload(predictions, outcomes=None, source=SOURCE_LIVE, real_time=True,
                 generated_at="2025-01-05T12:00:00Z"):
    return SourcePayload(
        predictions=list(predictions),
        outcomes=list(outcomes or []),
        results=[],
        generated_at=generated_at,
        source=source,
        real_time=real_time,
    )


def fallback_failure():
    return DataFetchError("google_sheets", "range 'Predictions!A:Z' query failed")
