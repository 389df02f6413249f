"""Data sources: live feed, spreadsheet fallback, and the fetcher over both."""

from edgeboard.ingestion.live_feed import LiveFeedClient
from edgeboard.ingestion.sheets import SheetsClient
from edgeboard.ingestion.fetcher import FetchResult, SourceFetcher, SourcePayload

__all__ = ["LiveFeedClient", "SheetsClient", "FetchResult", "SourceFetcher", "SourcePayload"]
