"""Edge band tables and classification.

A band table is an ordered tuple of ``EdgeBand`` rows, highest band first.
Each band covers ``[lower_bound, lower bound of the band above)``; the last
band has no lower bound, so every finite edge lands in exactly one band.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple
import json
import logging

from edgeboard.constants import EDGE_BAND_TABLES, DEFAULT_EDGE_BAND_TABLE
from edgeboard.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeBand:
    """One row of the band table."""
    label: str
    lower_bound: Optional[float]
    confidence: str


BandTable = Tuple[EdgeBand, ...]


def build_band_table(rows: Iterable[Sequence]) -> BandTable:
    """Validate ``(label, lower_bound, confidence)`` rows into a band table."""
    bands = tuple(
        EdgeBand(
            label=str(label),
            lower_bound=None if lower is None else float(lower),
            confidence=str(confidence),
        )
        for label, lower, confidence in rows
    )
    if not bands:
        raise ConfigurationError("edge_bands", "band table is empty")

    labels = [band.label for band in bands]
    if len(set(labels)) != len(labels):
        raise ConfigurationError("edge_bands", f"duplicate band labels: {labels}")

    if bands[-1].lower_bound is not None:
        raise ConfigurationError("edge_bands", "last band must have no lower bound")

    bounds = [band.lower_bound for band in bands[:-1]]
    if any(bound is None for bound in bounds):
        raise ConfigurationError("edge_bands", "only the last band may omit its lower bound")
    if any(upper <= lower for upper, lower in zip(bounds, bounds[1:])):
        raise ConfigurationError("edge_bands", "lower bounds must be strictly descending")

    return bands


def _rows_from_payload(payload) -> list:
    entries = payload.get("bands") if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        raise ConfigurationError("edge_bands", "expected a list of bands")
    rows = []
    for entry in entries:
        if not isinstance(entry, dict) or "label" not in entry or "confidence" not in entry:
            raise ConfigurationError("edge_bands", f"invalid band entry: {entry!r}")
        rows.append((entry["label"], entry.get("min"), entry["confidence"]))
    return rows


def load_edge_bands(table_name: str = DEFAULT_EDGE_BAND_TABLE, path: str = "") -> BandTable:
    """Load a named band table, optionally overridden by a JSON file.

    The file holds either a list of ``{"label", "min", "confidence"}``
    objects or ``{"bands": [...]}``. An unreadable file falls back to the
    named table; a readable but malformed one is a configuration error.
    """
    if table_name not in EDGE_BAND_TABLES:
        raise ConfigurationError(
            "EDGE_BAND_TABLE",
            f"unknown table '{table_name}'. Valid tables: {', '.join(sorted(EDGE_BAND_TABLES))}",
        )
    default = build_band_table(EDGE_BAND_TABLES[table_name])
    if not path:
        return default

    bands_path = Path(path)
    try:
        payload = json.loads(bands_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read edge bands from %s (%s); using '%s' table.", path, exc, table_name)
        return default

    return build_band_table(_rows_from_payload(payload))


def classify_edge(edge: float, bands: BandTable) -> EdgeBand:
    """Return the single band containing ``edge``."""
    for band in bands:
        if band.lower_bound is None or edge >= band.lower_bound:
            return band
    # build_band_table guarantees a catch-all last band
    return bands[-1]


def find_band(label: str, bands: BandTable) -> Optional[EdgeBand]:
    for band in bands:
        if band.label == label:
            return band
    return None
