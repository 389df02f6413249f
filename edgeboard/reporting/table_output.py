"""Prediction tables and per-band breakdowns."""

from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from edgeboard.models.bands import BandTable
from edgeboard.models.derivation import CanonicalPrediction

PREDICTION_COLUMNS = [
    "matchup",
    "favorite",
    "underdog",
    "ourLine",
    "vegasLine",
    "edge",
    "betRecommendation",
    "confidence",
    "edgeBand",
]

BREAKDOWN_COLUMNS = ["edgeBand", "confidence", "opportunities", "valueBets", "topEdge"]


def predictions_frame(predictions: Iterable[CanonicalPrediction]) -> pd.DataFrame:
    """One row per prediction, in snapshot order."""
    rows = [prediction.to_dict() for prediction in predictions]
    return pd.DataFrame(rows, columns=PREDICTION_COLUMNS)


def band_breakdown(
    predictions: Sequence[CanonicalPrediction],
    bands: BandTable,
    value_bet_threshold: float = 0.1,
) -> pd.DataFrame:
    """Count opportunities and value bets per edge band.

    Bands appear in table order (highest first); bands with no games are
    kept with zero counts. Source-supplied bands that are not in the table
    are appended after the configured ones.
    """
    frame = predictions_frame(predictions)
    if frame.empty:
        return pd.DataFrame(
            [(band.label, band.confidence, 0, 0, 0.0) for band in bands],
            columns=BREAKDOWN_COLUMNS,
        )

    frame["isValue"] = frame["edge"] >= value_bet_threshold
    grouped = frame.groupby("edgeBand", sort=False).agg(
        opportunities=("matchup", "size"),
        valueBets=("isValue", "sum"),
        topEdge=("edge", "max"),
        confidence=("confidence", "first"),
    )

    labels = [band.label for band in bands]
    labels.extend(label for label in grouped.index if label not in labels)
    breakdown = grouped.reindex(labels)

    defaults = {band.label: band.confidence for band in bands}
    breakdown["confidence"] = breakdown["confidence"].fillna(pd.Series(defaults))
    breakdown["opportunities"] = breakdown["opportunities"].fillna(0).astype(int)
    breakdown["valueBets"] = breakdown["valueBets"].fillna(0).astype(int)
    breakdown["topEdge"] = breakdown["topEdge"].fillna(0.0)

    breakdown.index.name = "edgeBand"
    return breakdown.reset_index()[BREAKDOWN_COLUMNS]


def write_predictions_csv(predictions: Iterable[CanonicalPrediction], output_path: str) -> str:
    """Write predictions to CSV and return the path written."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    predictions_frame(predictions).to_csv(path, index=False)
    return str(path)
