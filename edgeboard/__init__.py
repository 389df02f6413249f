"""Edgeboard: betting-edge predictions with live-feed and spreadsheet sources."""

__all__ = [
    "cli",
    "config",
    "constants",
    "exceptions",
    "ingestion",
    "normalization",
    "models",
    "notifications",
    "reporting",
    "runtime",
    "ops",
    "status",
]

__version__ = "0.1.0"
