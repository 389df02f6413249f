"""Derive canonical predictions from raw source records.

Each raw record (live feed or spreadsheet row) becomes a
``CanonicalPrediction`` with a numeric edge, a bet recommendation and an
edge band with its confidence label. Nothing here raises on bad data:
missing or malformed fields fall back to defaults.
"""

from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from edgeboard.constants import NO_LINE_RECOMMENDATION
from edgeboard.models.bands import BandTable, classify_edge, find_band
from edgeboard.normalization.fields import resolve_number, resolve_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanonicalPrediction:
    """Normalized, source-agnostic prediction for one game."""
    matchup: str
    favorite: str
    underdog: str
    our_line: float
    vegas_line: float
    edge: float
    bet_recommendation: str
    confidence: str
    edge_band: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matchup": self.matchup,
            "favorite": self.favorite,
            "underdog": self.underdog,
            "ourLine": self.our_line,
            "vegasLine": self.vegas_line,
            "edge": self.edge,
            "betRecommendation": self.bet_recommendation,
            "confidence": self.confidence,
            "edgeBand": self.edge_band,
        }


def format_line(value: float) -> str:
    """Render a spread without a trailing ``.0`` (7.0 -> '7', 7.5 -> '7.5')."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def recommend_bet(
    favorite: str,
    underdog: str,
    our_line: float,
    vegas_line: float,
    edge: float,
) -> str:
    """Synthesize a recommendation when the source did not supply one."""
    if edge > 0 and vegas_line > 0:
        line = format_line(vegas_line)
        if our_line > vegas_line:
            return f"Take {favorite} -{line}"
        return f"Take {underdog} +{line}"
    return NO_LINE_RECOMMENDATION


def derive_prediction(record: Mapping[str, Any], bands: BandTable) -> Optional[CanonicalPrediction]:
    """Build one canonical prediction, or None when the record has no matchup."""
    matchup = resolve_text(record, "matchup")
    if not matchup.strip():
        return None

    favorite = resolve_text(record, "favorite")
    underdog = resolve_text(record, "underdog")
    edge = resolve_number(record, "edge")
    our_line = resolve_number(record, "our_line")
    vegas_line = resolve_number(record, "vegas_line")

    bet_recommendation = resolve_text(record, "bet_recommendation")
    if not bet_recommendation:
        bet_recommendation = recommend_bet(favorite, underdog, our_line, vegas_line, edge)

    edge_band = resolve_text(record, "edge_band")
    confidence = resolve_text(record, "confidence")
    if not edge_band:
        # Band and confidence come from the table as a pair
        band = classify_edge(edge, bands)
        edge_band = band.label
        confidence = band.confidence
    elif not confidence:
        band = find_band(edge_band, bands) or classify_edge(edge, bands)
        confidence = band.confidence

    return CanonicalPrediction(
        matchup=matchup,
        favorite=favorite,
        underdog=underdog,
        our_line=our_line,
        vegas_line=vegas_line,
        edge=edge,
        bet_recommendation=bet_recommendation,
        confidence=confidence,
        edge_band=edge_band,
    )


def derive_predictions(records: Iterable[Mapping[str, Any]], bands: BandTable) -> List[CanonicalPrediction]:
    """Derive every usable record and order by edge, highest first.

    The sort is stable, so records with equal edges keep their input order.
    """
    predictions: List[CanonicalPrediction] = []
    dropped = 0
    for record in records or []:
        if not isinstance(record, Mapping):
            dropped += 1
            continue
        prediction = derive_prediction(record, bands)
        if prediction is None:
            dropped += 1
            continue
        predictions.append(prediction)

    if dropped:
        logger.debug("Dropped %d records without a matchup.", dropped)

    return sorted(predictions, key=attrgetter("edge"), reverse=True)
