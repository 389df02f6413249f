"""
Constants for edgeboard.

Provides source tags, live-feed endpoints, sentinel values and the
observed edge band tables.
"""

from typing import Dict, List, Optional, Tuple


# =============================================================================
# SOURCES
# =============================================================================

SOURCE_LIVE = "live"
SOURCE_SHEETS = "google_sheets"

# Live feed endpoints (relative to API_SERVER_URL)
PREDICTIONS_PATH = "/api/predictions/current"
RESULTS_PATH = "/api/results/current"
HEALTH_PATH = "/api/health"
PERFORMANCE_SUMMARY_PATH = "/api/performance/summary"

# Read-only scope for the fallback spreadsheet
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

# The cover analysis sheet carries a three-row preamble above its headers
COVER_ANALYSIS_HEADER_ROW = 3

NOTIFICATION_FILENAME = "latest.json"


# =============================================================================
# FIELD VALUES
# =============================================================================

# Cell values that mean "no value" even though they are non-empty
NOT_AVAILABLE_SENTINELS = ("N/A", "No Line Available")

NO_LINE_RECOMMENDATION = "No line available"

RESULT_WIN = "WIN"
RESULT_LOSS = "LOSS"


# =============================================================================
# EDGE BANDS
# =============================================================================

# (label, lower bound, confidence). Rows run from the highest band down; the
# last row has no lower bound and catches everything below the one above it.
EdgeBandRow = Tuple[str, Optional[float], str]

EDGE_BAND_TABLES: Dict[str, List[EdgeBandRow]] = {
    "current": [
        ("12+", 12.0, "Elite (57.1%)"),
        ("9-12", 9.0, "Strong (61.0%)"),
        ("7-9", 7.0, "Below Average (40.7%)"),
        ("5-7", 5.0, "Average (52.5%)"),
        ("2-5", 2.0, "Good (55.1%)"),
        ("0-2", None, "Good (58.3%)"),
    ],
    "legacy": [
        ("12+", 12.0, "Elite (58.5%)"),
        ("9-12", 9.0, "Strong (70.6%)"),
        ("7-9", 7.0, "Good (66.7%)"),
        ("5-7", 5.0, "Weak (46.2%)"),
        ("2-5", 2.0, "Fade (35.7%)"),
        ("0-2", None, "Fade (46.7%)"),
    ],
}

DEFAULT_EDGE_BAND_TABLE = "current"
