from __future__ import annotations

import re
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import Any, Mapping, Optional

from sales_dashboard.models.deals import DealRecord

YEAR_MONTH_PATTERN = re.compile(r"^\s*(\d{4})年(\d{1,2})月")
ISO_DATE_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})")
AMOUNT_STRIP_PATTERN = re.compile(r"[,\s¥￥円]")

# Sheet header -> DealRecord field.
SHEET_COLUMNS = {
    "案件ID": "id",
    "商流": "channel",
    "売上（税抜）": "sales",
    "粗利（税抜）": "profit",
    "案件フェーズ": "phase",
    "受注月": "order_date",
    "納品月": "delivery_date",
    "営業担当": "sales_rep",
}


def parse_month_date(value: Any) -> Optional[date]:
    """Read a ``2024年5月`` style month into the first day of that month.

    Dates pass through unchanged; ISO ``YYYY-MM-DD`` text is anchored to the
    first of its month. Anything else is treated as a missing date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    match = YEAR_MONTH_PATTERN.match(value) or ISO_DATE_PATTERN.match(value)
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or not MINYEAR <= year <= MAXYEAR:
        return None
    return date(year, month, 1)


def parse_amount(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        cleaned = AMOUNT_STRIP_PATTERN.sub("", str(value))
        try:
            amount = float(cleaned)
        except ValueError:
            return 0.0
    # NaN and infinities would poison every sum they touch.
    if amount != amount or amount in (float("inf"), float("-inf")):
        return 0.0
    return amount


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_deal(row: Mapping[str, Any]) -> DealRecord:
    values = {SHEET_COLUMNS.get(key, key): value for key, value in row.items()}
    return DealRecord(
        id=_clean_text(values.get("id")),
        channel=_clean_text(values.get("channel")),
        sales=parse_amount(values.get("sales")),
        profit=parse_amount(values.get("profit")),
        phase=_clean_text(values.get("phase")),
        order_date=parse_month_date(values.get("order_date") or values.get("order_month")),
        delivery_date=parse_month_date(values.get("delivery_date") or values.get("delivery_month")),
        sales_rep=_clean_text(values.get("sales_rep")),
    )
