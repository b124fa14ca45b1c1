from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Set

from sales_dashboard.analytics.deal_aggregates import (
    aggregate_channel_shares,
    aggregate_monthly,
    aggregate_rep_performance,
)
from sales_dashboard.analytics.deal_filters import filter_deals
from sales_dashboard.analytics.fiscal_calendar import fiscal_period_bounds, fiscal_period_index
from sales_dashboard.analytics.rep_sorting import sort_rep_performance
from sales_dashboard.models.deals import DealPhase, DealRecord, ReferenceDate
from sales_dashboard.schemas.sales_dashboard import (
    DashboardOptions,
    DashboardView,
    DealSelection,
    FiscalPeriodOption,
    RepPerformanceRow,
    SortState,
)


def _distinct(values: Iterable[object]) -> List[str]:
    seen: Dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(str(value), None)
    return list(seen)


def build_fiscal_period_options(
    deals: Iterable[DealRecord], start_month: int, base_year: int
) -> List[FiscalPeriodOption]:
    periods: Set[int] = set()
    for deal in deals:
        for value in (deal.order_date, deal.delivery_date):
            period = fiscal_period_index(value, start_month, base_year)
            if period is not None and period >= 1:
                periods.add(period)

    options: List[FiscalPeriodOption] = []
    for period in sorted(periods):
        try:
            period_start, period_end = fiscal_period_bounds(period, start_month, base_year)
        except ValueError:
            # Bounds fall outside the date range (fiscal year 9999 ends in 10000).
            continue
        options.append(
            FiscalPeriodOption(
                fiscal_period=period,
                fiscal_year=period_start.year,
                period_start=period_start,
                period_end=period_end,
                label=f"第{period}期",
            )
        )
    return options


def build_options(deals: Sequence[DealRecord], start_month: int, base_year: int) -> DashboardOptions:
    return DashboardOptions(
        sales_reps=_distinct(deal.sales_rep for deal in deals),
        channels=_distinct(deal.channel for deal in deals),
        fiscal_periods=build_fiscal_period_options(deals, start_month, base_year),
        phases=[phase.value for phase in DealPhase],
    )


def build_rep_performance(
    deals: Sequence[DealRecord],
    selection: DealSelection,
    sort: SortState,
    *,
    start_month: int,
    base_year: int,
    reference: ReferenceDate = ReferenceDate.DELIVERY_OR_ORDER,
) -> List[RepPerformanceRow]:
    filtered = filter_deals(
        deals, selection, start_month=start_month, base_year=base_year, reference=reference
    )
    return sort_rep_performance(aggregate_rep_performance(filtered), sort.key, sort.direction)


def assemble_dashboard(
    deals: Sequence[DealRecord],
    selection: DealSelection,
    sort: SortState,
    *,
    start_month: int,
    base_year: int,
    reference: ReferenceDate = ReferenceDate.DELIVERY_OR_ORDER,
) -> DashboardView:
    """Run filter, aggregation and sort over one snapshot of deals.

    Each monthly series is filtered on its own date so a deal ordered in one
    fiscal year and delivered in the next shows up in the matching series
    only. Channel shares and the rep rollup use ``reference``.
    """
    order_deals = filter_deals(
        deals, selection, start_month=start_month, base_year=base_year, reference=ReferenceDate.ORDER
    )
    delivery_deals = filter_deals(
        deals, selection, start_month=start_month, base_year=base_year, reference=ReferenceDate.DELIVERY
    )
    reference_deals = filter_deals(
        deals, selection, start_month=start_month, base_year=base_year, reference=reference
    )

    return DashboardView(
        selection=selection,
        sort=sort,
        deal_count=len(reference_deals),
        order_monthly=aggregate_monthly(order_deals, "order_date", start_month),
        delivery_monthly=aggregate_monthly(delivery_deals, "delivery_date", start_month),
        channel_shares=aggregate_channel_shares(reference_deals),
        rep_performance=sort_rep_performance(
            aggregate_rep_performance(reference_deals), sort.key, sort.direction
        ),
        options=build_options(deals, start_month, base_year),
    )

