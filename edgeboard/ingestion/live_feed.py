"""Async client for the live prediction feed.

Every request carries its own timeout, so a slow call is cancelled on its
own without touching requests made by other tasks.

Usage:
    import asyncio
    from edgeboard.ingestion.live_feed import LiveFeedClient

    async def main():
        client = LiveFeedClient("http://localhost:8001", timeout=5.0)
        data = await client.fetch_predictions()
        print(len(data["predictions"]))

    asyncio.run(main())
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional
import asyncio
import json
import logging

import aiohttp

from edgeboard.constants import PREDICTIONS_PATH, RESULTS_PATH
from edgeboard.exceptions import LiveFeedError

logger = logging.getLogger(__name__)


def _record_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [row for row in value if isinstance(row, dict)]


class LiveFeedClient:
    """
    Client for the live prediction API server.

    Raises ``LiveFeedError`` for every kind of failure (timeout, connection
    error, non-2xx status, malformed body) so callers have a single thing
    to catch before falling back.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize live feed client.

        Args:
            base_url: API server address, e.g. http://localhost:8001
            timeout: Per-request timeout in seconds
            session: Optional shared session (a new one is opened per call otherwise)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return
        async with aiohttp.ClientSession() as session:
            yield session

    async def _get_json(self, path: str) -> Any:
        """GET ``path`` and decode the JSON body."""
        url = f"{self.base_url}{path}"
        limit = self.timeout
        try:
            async with self._session_scope() as session:
                async with session.get(url, timeout=aiohttp.ClientTimeout(total=limit)) as response:
                    if not 200 <= response.status < 300:
                        raise LiveFeedError(f"GET {path} failed", status_code=response.status)
                    try:
                        return await response.json(content_type=None)
                    except (json.JSONDecodeError, ValueError) as e:
                        raise LiveFeedError(f"GET {path} returned malformed JSON", original_error=e)
        except asyncio.TimeoutError as e:
            raise LiveFeedError(f"GET {path} timed out after {limit}s", original_error=e)
        except aiohttp.ClientError as e:
            raise LiveFeedError(f"GET {path} network error", original_error=e)

    async def fetch_predictions(self) -> Dict[str, Any]:
        """
        Fetch the current prediction set.

        Returns:
            Dict with ``predictions`` (list of raw records) and ``generated_at``

        Raises:
            LiveFeedError: If the call fails or the envelope is not
                ``{success: true, data: {...}}``
        """
        payload = await self._get_json(PREDICTIONS_PATH)
        if not isinstance(payload, dict) or not payload.get("success"):
            raise LiveFeedError("predictions response not marked successful")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise LiveFeedError("predictions response has no data object")
        return {
            "predictions": _record_list(data.get("predictions")),
            "generated_at": data.get("generated_at") or None,
        }

    async def fetch_results(self) -> Dict[str, List[Dict[str, Any]]]:
        """Fetch settled results (cover analysis and vegas spread analysis)."""
        payload = await self._get_json(RESULTS_PATH)
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise LiveFeedError("results response has no data object")
        return {
            "cover_analysis": _record_list(data.get("cover_analysis")),
            "vegas_spread_analysis": _record_list(data.get("vegas_spread_analysis")),
        }

