"""Derivation and aggregation over normalized records."""

from edgeboard.models.bands import (
    EdgeBand,
    build_band_table,
    classify_edge,
    find_band,
    load_edge_bands,
)
from edgeboard.models.derivation import (
    CanonicalPrediction,
    derive_prediction,
    derive_predictions,
    recommend_bet,
)
from edgeboard.models.performance import PerformanceSummary, summarize_performance

__all__ = [
    "EdgeBand",
    "build_band_table",
    "classify_edge",
    "find_band",
    "load_edge_bands",
    "CanonicalPrediction",
    "derive_prediction",
    "derive_predictions",
    "recommend_bet",
    "PerformanceSummary",
    "summarize_performance",
]
