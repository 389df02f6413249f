"""Field resolution across the live-feed and spreadsheet naming conventions.

The live feed sends snake_case keys while the spreadsheet fallback uses its
header labels. ``FIELD_SOURCES`` lists, per canonical field, the source keys
to probe in priority order: live key first, then the spreadsheet header.
"""

from typing import Any, Dict, Mapping, Optional, Tuple
import math

from edgeboard.constants import NOT_AVAILABLE_SENTINELS


FIELD_SOURCES: Dict[str, Tuple[str, ...]] = {
    "matchup": ("matchup", "Matchup"),
    "favorite": ("favorite", "Favorite"),
    "underdog": ("underdog", "Underdog"),
    "edge": ("edge", "Edge"),
    "our_line": ("predicted_difference", "Predicted Difference"),
    "vegas_line": ("vegas_line", "Line"),
    "bet_recommendation": ("betting_recommendation", "Betting Recommendation"),
    "edge_band": ("edge_band", "Edge Band"),
    "confidence": ("strategy", "Strategy"),
}

_SENTINELS = {value.upper() for value in NOT_AVAILABLE_SENTINELS}


def _source_keys(field: str) -> Tuple[str, ...]:
    try:
        return FIELD_SOURCES[field]
    except KeyError:
        raise KeyError(f"Unknown canonical field: {field}") from None


def parse_number(value: Any) -> Optional[float]:
    """Parse a cell into a finite float, or None when it carries no number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text or text.upper() in _SENTINELS:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def resolve_text(record: Mapping[str, Any], field: str) -> str:
    """First non-empty value among the field's source keys, else ``''``."""
    for key in _source_keys(field):
        value = record.get(key)
        if value is None:
            continue
        text = str(value)
        if text:
            return text
    return ""


def resolve_number(record: Mapping[str, Any], field: str, default: float = 0.0) -> float:
    """First source value that parses as a number, else ``default``.

    Sentinels such as ``N/A`` and non-numeric text count as absent, so a
    garbage live-feed value falls through to the spreadsheet key.
    """
    for key in _source_keys(field):
        number = parse_number(record.get(key))
        if number is not None:
            return number
    return default
