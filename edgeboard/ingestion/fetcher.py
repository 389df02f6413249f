"""Source fetcher: live feed first, Google Sheets fallback.

The live attempt and the fallback are strictly sequential; the fallback
only starts once the live attempt has failed. Live failures of any kind
(timeout, network, bad status, malformed body) are never surfaced.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import asyncio
import logging

from edgeboard.config import Config
from edgeboard.constants import COVER_ANALYSIS_HEADER_ROW, SOURCE_LIVE, SOURCE_SHEETS
from edgeboard.exceptions import DataFetchError, EdgeboardError, LiveFeedError
from edgeboard.ingestion.live_feed import LiveFeedClient
from edgeboard.ingestion.sheets import SheetsClient
from edgeboard.normalization.tables import rows_to_records

logger = logging.getLogger(__name__)

Records = List[Dict[str, Any]]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SourcePayload:
    """Raw records of one refresh, tagged with where they came from."""
    predictions: Records
    outcomes: Records
    results: Records
    generated_at: str
    source: str
    real_time: bool


@dataclass(frozen=True)
class FetchResult:
    """Either a payload (with its provenance) or the reason the fetch failed."""
    payload: Optional[SourcePayload] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.payload is not None

    @classmethod
    def success(cls, payload: SourcePayload) -> "FetchResult":
        return cls(payload=payload)

    @classmethod
    def failure(cls, reason: str) -> "FetchResult":
        return cls(error=reason)


class SourceFetcher:
    """
    Fetch raw predictions and outcomes for one refresh cycle.

    Typical use:
        fetcher = SourceFetcher.from_config(Config.from_env())
        result = await fetcher.fetch_result()
        if result.ok:
            print(result.payload.source, len(result.payload.predictions))
    """

    def __init__(
        self,
        live_client: Optional[LiveFeedClient],
        sheets_client: SheetsClient,
        predictions_range: str = "Predictions!A:Z",
        cover_analysis_range: str = "Cover Analysis!A:Z",
        results_range: str = "Results!A:Z",
    ):
        self._live = live_client
        self._sheets = sheets_client
        self.predictions_range = predictions_range
        self.cover_analysis_range = cover_analysis_range
        self.results_range = results_range

    @classmethod
    def from_config(cls, config: Config) -> "SourceFetcher":
        live = LiveFeedClient(
            config.api_server_url,
            timeout=config.live_timeout,
        ) if config.api_server_url else None
        sheets = SheetsClient(
            sheet_id=config.sheet_id,
            service_account_path=config.service_account_path,
            client_email=config.google_client_email,
            private_key=config.google_private_key,
            project_id=config.google_project_id,
        )
        return cls(
            live,
            sheets,
            predictions_range=config.predictions_range,
            cover_analysis_range=config.cover_analysis_range,
            results_range=config.results_range,
        )

    async def fetch(self) -> SourcePayload:
        """
        Fetch one cycle's data.

        Returns:
            SourcePayload from the live feed, or from the spreadsheet when the
            live feed is unavailable

        Raises:
            CredentialError: If the fallback credentials cannot be resolved
            DataFetchError: If the fallback predictions query fails
            ConfigurationError: If the fallback is not configured
        """
        if self._live is not None:
            try:
                return await self._fetch_live()
            except LiveFeedError as e:
                logger.info("Live feed unavailable, falling back to Google Sheets: %s", e)
        return await self._fetch_sheets()

    async def fetch_result(self) -> FetchResult:
        """Like ``fetch`` but returns failures as a ``FetchResult``."""
        try:
            return FetchResult.success(await self.fetch())
        except EdgeboardError as e:
            logger.error("Both data sources failed: %s", e)
            return FetchResult.failure(str(e))

    async def _fetch_live(self) -> SourcePayload:
        data = await self._live.fetch_predictions()

        try:
            results = await self._live.fetch_results()
        except LiveFeedError as e:
            logger.warning("Live results unavailable, continuing without outcomes: %s", e)
            results = {"cover_analysis": [], "vegas_spread_analysis": []}

        logger.info("Data fetched from live feed (%d predictions)", len(data["predictions"]))
        return SourcePayload(
            predictions=data["predictions"],
            outcomes=results["cover_analysis"],
            results=results["vegas_spread_analysis"],
            generated_at=data["generated_at"] or _utc_now_iso(),
            source=SOURCE_LIVE,
            real_time=True,
        )

    async def _read_range(self, range_name: str) -> List[List[Any]]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._sheets.get_values, range_name)

    async def _read_optional_range(self, range_name: str) -> List[List[Any]]:
        try:
            return await self._read_range(range_name)
        except DataFetchError as e:
            logger.warning("Sheet range '%s' unavailable, treating as empty: %s", range_name, e)
            return []

    async def _fetch_sheets(self) -> SourcePayload:
        logger.info("Fetching Google Sheets data...")
        prediction_rows = await self._read_range(self.predictions_range)
        cover_rows = await self._read_optional_range(self.cover_analysis_range)
        result_rows = await self._read_optional_range(self.results_range)

        predictions = rows_to_records(prediction_rows)
        outcomes = rows_to_records(cover_rows, header_index=COVER_ANALYSIS_HEADER_ROW)
        results = rows_to_records(result_rows)
        logger.info(
            "Data fetched from Google Sheets (%d predictions, %d outcomes)",
            len(predictions),
            len(outcomes),
        )
        return SourcePayload(
            predictions=predictions,
            outcomes=outcomes,
            results=results,
            generated_at=_utc_now_iso(),
            source=SOURCE_SHEETS,
            real_time=False,
        )
