from __future__ import annotations

from typing import Iterable, List, Optional

from sales_dashboard.schemas.sales_dashboard import RepPerformanceRow, SortState

SORT_KEYS = ("sales_rep", "deal_count", "total_sales", "total_profit", "avg_sale")
ASCENDING = "ascending"
DESCENDING = "descending"


def sort_rep_performance(
    rows: Iterable[RepPerformanceRow], key: str, direction: str = ASCENDING
) -> List[RepPerformanceRow]:
    """Order rollup rows by one field; ties keep their input order either way."""
    if key not in SORT_KEYS:
        raise ValueError(f"Unsupported sort key: {key}")
    if direction not in (ASCENDING, DESCENDING):
        raise ValueError(f"Unsupported sort direction: {direction}")
    return sorted(rows, key=lambda row: getattr(row, key), reverse=direction == DESCENDING)


def toggle_sort(current: Optional[SortState], key: str) -> SortState:
    if current is not None and current.key == key:
        direction = ASCENDING if current.direction == DESCENDING else DESCENDING
        return SortState(key=key, direction=direction)
    return SortState(key=key, direction=ASCENDING)
