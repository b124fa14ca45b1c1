from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class DealPhase(str, Enum):
    PROPOSING = "提案中"
    CONFIRMED = "実施確定"
    ORDERED = "受注済み"
    DELIVERED = "納品完了"
    LOST = "失注"


class ReferenceDate(str, Enum):
    """Which deal date decides the fiscal period a deal belongs to."""

    DELIVERY_OR_ORDER = "delivery_or_order"
    DELIVERY = "delivery"
    ORDER = "order"


class DealRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    channel: Optional[str] = None
    sales: float = 0.0
    profit: float = 0.0
    phase: Optional[str] = None
    order_date: Optional[date] = None
    delivery_date: Optional[date] = None
    sales_rep: Optional[str] = None


class DealSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    deals: Tuple[DealRecord, ...]
    fetched_at: datetime
    source: str = "google_sheets"
