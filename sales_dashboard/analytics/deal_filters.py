from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from sales_dashboard.analytics.fiscal_calendar import fiscal_period_index
from sales_dashboard.models.deals import DealRecord, ReferenceDate
from sales_dashboard.schemas.sales_dashboard import DealSelection


def reference_date(deal: DealRecord, reference: ReferenceDate) -> Optional[date]:
    if reference == ReferenceDate.ORDER:
        return deal.order_date
    if reference == ReferenceDate.DELIVERY:
        return deal.delivery_date
    return deal.delivery_date or deal.order_date


def filter_deals(
    deals: Iterable[DealRecord],
    selection: DealSelection,
    *,
    start_month: int,
    base_year: int,
    reference: ReferenceDate = ReferenceDate.DELIVERY_OR_ORDER,
) -> List[DealRecord]:
    phases = set(selection.phases)
    sales_reps = set(selection.sales_reps)
    channels = set(selection.channels)

    filtered: List[DealRecord] = []
    for deal in deals:
        if phases and deal.phase not in phases:
            continue
        if selection.fiscal_period is not None:
            period = fiscal_period_index(reference_date(deal, reference), start_month, base_year)
            if period != selection.fiscal_period:
                continue
        if sales_reps and deal.sales_rep not in sales_reps:
            continue
        if channels and deal.channel not in channels:
            continue
        filtered.append(deal)
    return filtered
