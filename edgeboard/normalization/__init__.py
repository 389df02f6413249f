"""Structural and field-level normalization of source records."""

from edgeboard.normalization.tables import rows_to_records
from edgeboard.normalization.fields import (
    FIELD_SOURCES,
    parse_number,
    resolve_number,
    resolve_text,
)

__all__ = [
    "rows_to_records",
    "FIELD_SOURCES",
    "parse_number",
    "resolve_number",
    "resolve_text",
]
