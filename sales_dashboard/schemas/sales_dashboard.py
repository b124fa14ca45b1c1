from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import ConfigDict, Field

from sales_dashboard.shared.base import BaseSchema, FrozenSchema

SORT_KEY_PATTERN = "^(sales_rep|deal_count|total_sales|total_profit|avg_sale)$"
SORT_DIRECTION_PATTERN = "^(ascending|descending)$"


class DealSelection(FrozenSchema):
    """Filter criteria; an empty list places no restriction on its field."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    fiscal_period: Optional[int] = Field(default=None, ge=1)
    phases: List[str] = Field(default_factory=list)
    sales_reps: List[str] = Field(default_factory=list)
    channels: List[str] = Field(default_factory=list)


class SortState(FrozenSchema):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    key: str = Field(default="total_sales", pattern=SORT_KEY_PATTERN)
    direction: str = Field(default="descending", pattern=SORT_DIRECTION_PATTERN)


class DealSummary(BaseSchema):
    id: Optional[str] = None
    channel: Optional[str] = None
    sales: float
    profit: float
    phase: Optional[str] = None
    order_date: Optional[date] = None
    delivery_date: Optional[date] = None
    sales_rep: Optional[str] = None


class MonthlyBucket(FrozenSchema):
    fiscal_month_index: int
    calendar_month: int
    label: str
    sales: float
    profit: float


class ChannelShare(FrozenSchema):
    channel: str
    profit: float
    share: float


class RepPerformanceRow(FrozenSchema):
    sales_rep: str
    deal_count: int
    total_sales: float
    total_profit: float
    avg_sale: float


class FiscalPeriodOption(BaseSchema):
    fiscal_period: int
    fiscal_year: int
    period_start: date
    period_end: date
    label: str


class DashboardOptions(BaseSchema):
    sales_reps: List[str]
    channels: List[str]
    fiscal_periods: List[FiscalPeriodOption]
    phases: List[str]


class DashboardView(BaseSchema):
    selection: DealSelection
    sort: SortState
    deal_count: int
    order_monthly: List[MonthlyBucket]
    delivery_monthly: List[MonthlyBucket]
    channel_shares: List[ChannelShare]
    rep_performance: List[RepPerformanceRow]
    options: DashboardOptions


class RepPerformanceResponse(BaseSchema):
    selection: DealSelection
    sort: SortState
    rows: List[RepPerformanceRow]


class SnapshotStatus(BaseSchema):
    deal_count: int
    fetched_at: str
    source: str
