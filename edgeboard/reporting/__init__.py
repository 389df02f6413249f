"""Tabular views of a dashboard snapshot."""

from edgeboard.reporting.table_output import (
    band_breakdown,
    predictions_frame,
    write_predictions_csv,
)

__all__ = ["band_breakdown", "predictions_frame", "write_predictions_csv"]
