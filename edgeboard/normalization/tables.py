"""Realign header-row tables into keyed records."""

from typing import Any, Dict, List, Sequence


def rows_to_records(rows: Sequence[Sequence[Any]], header_index: int = 0) -> List[Dict[str, str]]:
    """Turn a row-major grid into one record per data row.

    The header row sits at ``header_index``; every row after it becomes a
    mapping from header label to cell value. Short rows and empty cells map
    to ``''``. A grid without data rows yields an empty list.
    """
    if not rows or len(rows) <= header_index + 1:
        return []

    headers = [str(header) for header in rows[header_index]]
    records: List[Dict[str, str]] = []
    for row in rows[header_index + 1:]:
        row = row or []
        record: Dict[str, str] = {}
        for index, header in enumerate(headers):
            value = row[index] if index < len(row) else None
            record[header] = value if value not in (None, "") else ""
        records.append(record)
    return records
