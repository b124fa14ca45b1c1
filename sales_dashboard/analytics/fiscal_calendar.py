from __future__ import annotations

import calendar
from datetime import date
from typing import List, Optional, Tuple


def fiscal_year(value: Optional[date], start_month: int) -> Optional[int]:
    if not isinstance(value, date):
        return None
    return value.year if value.month >= start_month else value.year - 1


def fiscal_period_index(value: Optional[date], start_month: int, base_year: int) -> Optional[int]:
    """1-based fiscal period number, where the fiscal year ``base_year`` is period 1."""
    year = fiscal_year(value, start_month)
    if year is None:
        return None
    return year - base_year + 1


def fiscal_month_index(value: date, start_month: int) -> int:
    return (value.month - start_month + 12) % 12


def calendar_month_for_index(index: int, start_month: int) -> int:
    return (start_month - 1 + index) % 12 + 1


def month_labels(start_month: int) -> List[str]:
    return [f"{calendar_month_for_index(index, start_month)}月" for index in range(12)]


def fiscal_period_bounds(period: int, start_month: int, base_year: int) -> Tuple[date, date]:
    start_year = base_year + period - 1
    period_start = date(start_year, start_month, 1)
    end_month = calendar_month_for_index(11, start_month)
    end_year = start_year if end_month >= start_month else start_year + 1
    period_end = date(end_year, end_month, calendar.monthrange(end_year, end_month)[1])
    return period_start, period_end
