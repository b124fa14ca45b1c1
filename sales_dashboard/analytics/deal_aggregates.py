from __future__ import annotations

from typing import Dict, Iterable, List

from sales_dashboard.analytics.fiscal_calendar import (
    calendar_month_for_index,
    fiscal_month_index,
    month_labels,
)
from sales_dashboard.models.deals import DealRecord
from sales_dashboard.schemas.sales_dashboard import ChannelShare, MonthlyBucket, RepPerformanceRow

MONTHLY_DATE_FIELDS = ("order_date", "delivery_date")


def aggregate_monthly(deals: Iterable[DealRecord], date_field: str, start_month: int) -> List[MonthlyBucket]:
    if date_field not in MONTHLY_DATE_FIELDS:
        raise ValueError(f"Unsupported date field: {date_field}")

    sales = [0.0] * 12
    profit = [0.0] * 12
    for deal in deals:
        value = getattr(deal, date_field)
        if value is None:
            continue
        index = fiscal_month_index(value, start_month)
        sales[index] += deal.sales
        profit[index] += deal.profit

    labels = month_labels(start_month)
    return [
        MonthlyBucket(
            fiscal_month_index=index,
            calendar_month=calendar_month_for_index(index, start_month),
            label=labels[index],
            sales=sales[index],
            profit=profit[index],
        )
        for index in range(12)
    ]


def aggregate_channel_shares(deals: Iterable[DealRecord]) -> List[ChannelShare]:
    totals: Dict[str, float] = {}
    for deal in deals:
        if not deal.channel:
            continue
        totals[deal.channel] = totals.get(deal.channel, 0.0) + deal.profit

    grand_total = sum(totals.values())
    return [
        ChannelShare(
            channel=channel,
            profit=profit,
            share=round(profit / grand_total, 4) if grand_total else 0.0,
        )
        for channel, profit in totals.items()
    ]


def aggregate_rep_performance(deals: Iterable[DealRecord]) -> List[RepPerformanceRow]:
    aggregate: Dict[str, Dict[str, float]] = {}
    for deal in deals:
        if not deal.sales_rep:
            continue
        bucket = aggregate.setdefault(
            deal.sales_rep,
            {"deal_count": 0, "total_sales": 0.0, "total_profit": 0.0},
        )
        bucket["deal_count"] += 1
        bucket["total_sales"] += deal.sales
        bucket["total_profit"] += deal.profit

    return [
        RepPerformanceRow(
            sales_rep=sales_rep,
            deal_count=int(bucket["deal_count"]),
            total_sales=bucket["total_sales"],
            total_profit=bucket["total_profit"],
            avg_sale=bucket["total_sales"] / bucket["deal_count"] if bucket["deal_count"] else 0.0,
        )
        for sales_rep, bucket in aggregate.items()
    ]
