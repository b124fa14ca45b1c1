from __future__ import annotations

from datetime import date

from sales_dashboard.analytics.deal_filters import filter_deals, reference_date
from sales_dashboard.models.deals import DealRecord, ReferenceDate
from sales_dashboard.schemas.sales_dashboard import DealSelection

DEFAULT_PHASES = ["納品完了", "受注済み", "実施確定"]


def _ids(deals):
    return [deal.id for deal in deals]


def test_reference_date_policies() -> None:
    deal = DealRecord(order_date=date(2024, 9, 1), delivery_date=None)
    assert reference_date(deal, ReferenceDate.DELIVERY_OR_ORDER) == date(2024, 9, 1)
    assert reference_date(deal, ReferenceDate.DELIVERY) is None
    assert reference_date(deal, ReferenceDate.ORDER) == date(2024, 9, 1)


def test_filter_by_phase_and_fiscal_period(sample_deals) -> None:
    selection = DealSelection(fiscal_period=2, phases=DEFAULT_PHASES)
    filtered = filter_deals(sample_deals, selection, start_month=4, base_year=2023)
    assert _ids(filtered) == ["1", "2", "3", "20"]


def test_filter_uses_delivery_only_policy(sample_deals) -> None:
    selection = DealSelection(fiscal_period=2, phases=DEFAULT_PHASES)
    filtered = filter_deals(
        sample_deals, selection, start_month=4, base_year=2023, reference=ReferenceDate.DELIVERY
    )
    assert _ids(filtered) == ["1", "2", "3"]


def test_filter_uses_order_policy(sample_deals) -> None:
    selection = DealSelection(fiscal_period=2, phases=DEFAULT_PHASES)
    filtered = filter_deals(
        sample_deals, selection, start_month=4, base_year=2023, reference=ReferenceDate.ORDER
    )
    assert _ids(filtered) == ["1", "2", "3", "19", "20"]


def test_empty_selection_lists_place_no_restriction(sample_deals) -> None:
    filtered = filter_deals(sample_deals, DealSelection(), start_month=4, base_year=2023)
    assert _ids(filtered) == _ids(sample_deals)


def test_filter_by_rep_and_channel(sample_deals) -> None:
    selection = DealSelection(sales_reps=["高橋 花子"], channels=["代理店B"])
    filtered = filter_deals(sample_deals, selection, start_month=4, base_year=2023)
    assert _ids(filtered) == ["3", "20"]


def test_deal_without_reference_date_never_matches_a_period() -> None:
    deals = [DealRecord(id="x", phase="納品完了")]
    selection = DealSelection(fiscal_period=2)
    assert filter_deals(deals, selection, start_month=4, base_year=2023) == []
    assert filter_deals(deals, DealSelection(), start_month=4, base_year=2023) == deals


def test_filter_is_idempotent_and_does_not_touch_input(sample_deals) -> None:
    original = list(sample_deals)
    selection = DealSelection(fiscal_period=2, phases=DEFAULT_PHASES, channels=["直販", "代理店B"])
    once = filter_deals(sample_deals, selection, start_month=4, base_year=2023)
    twice = filter_deals(once, selection, start_month=4, base_year=2023)
    assert once == twice
    assert once is not sample_deals
    assert sample_deals == original


def test_filter_of_empty_collection() -> None:
    assert filter_deals([], DealSelection(fiscal_period=1), start_month=4, base_year=2023) == []
