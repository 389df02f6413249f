"""
Pytest configuration and shared fixtures for edgeboard tests.
"""

import pytest

from edgeboard.constants import EDGE_BAND_TABLES
from edgeboard.models.bands import build_band_table


@pytest.fixture
def bands():
    """Default (current) edge band table."""
    return build_band_table(EDGE_BAND_TABLES["current"])


@pytest.fixture
def sheet_record():
    """Spreadsheet-style prediction row."""
    return {
        "Matchup": "A vs B",
        "Favorite": "A",
        "Underdog": "B",
        "Edge": "9.5",
        "Predicted Difference": "10.0",
        "Line": "7.0",
    }


@pytest.fixture
def live_record():
    """Live-feed prediction record with precomputed fields."""
    return {
        "matchup": "Kansas State @ Iowa State",
        "favorite": "Iowa State",
        "underdog": "Kansas State",
        "edge": "3.2",
        "predicted_difference": "9.7",
        "vegas_line": "6.5",
        "betting_recommendation": "Take Iowa State -6.5",
        "edge_band": "2-5",
        "strategy": "Good (55.1%)",
    }


@pytest.fixture
def prediction_rows():
    """Predictions sheet grid: header row plus data rows."""
    return [
        ["Matchup", "Favorite", "Underdog", "Predicted Difference", "Line", "Edge"],
        ["Texas @ Baylor", "Baylor", "Texas", "12.5", "3.5", "9.0"],
        ["Duke @ UNC", "Duke", "UNC", "1.0", "N/A", "N/A"],
        ["", "", "", "", "", ""],
        ["Purdue @ Iowa", "Purdue", "Iowa", "2.0", "4.5"],
    ]


@pytest.fixture
def cover_rows():
    """Cover analysis grid: three preamble rows, header row, data rows."""
    return [
        ["Cover Analysis"],
        ["Season to date"],
        [],
        ["Matchup", "Pick", "Result"],
        ["Texas @ Baylor", "Baylor -3.5", "WIN"],
        ["Duke @ UNC", "UNC +2", "LOSS"],
        ["Purdue @ Iowa", "Iowa +4.5", "WIN"],
        ["Kansas @ Kentucky", "Kansas -1", "PUSH"],
    ]


@pytest.fixture
def result_rows():
    return [
        ["Date", "Matchup", "Final"],
        ["2025-01-04", "Texas @ Baylor", "70-61"],
    ]
