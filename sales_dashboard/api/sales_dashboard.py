from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from sales_dashboard.api.dependencies import get_sales_dashboard_service
from sales_dashboard.core.config import get_default_phases, get_settings
from sales_dashboard.schemas.sales_dashboard import (
    SORT_DIRECTION_PATTERN,
    SORT_KEY_PATTERN,
    DashboardOptions,
    DashboardView,
    DealSelection,
    DealSummary,
    RepPerformanceResponse,
    SnapshotStatus,
    SortState,
)
from sales_dashboard.services.sales_dashboard_service import SalesDashboardService
from sales_dashboard.shared.response import Meta, ResponseEnvelope, build_meta

router = APIRouter(prefix="/sales", tags=["sales"])


def get_deal_selection(
    fiscal_period: int | None = Query(default=None, ge=1),
    all_periods: bool = Query(default=False),
    phases: List[str] | None = Query(default=None),
    all_phases: bool = Query(default=False),
    sales_reps: List[str] | None = Query(default=None),
    channels: List[str] | None = Query(default=None),
) -> DealSelection:
    settings = get_settings()
    if all_periods:
        fiscal_period = None
    elif fiscal_period is None:
        fiscal_period = settings.default_fiscal_period
    if all_phases:
        phases = []
    elif phases is None:
        phases = get_default_phases()
    return DealSelection(
        fiscal_period=fiscal_period,
        phases=phases,
        sales_reps=sales_reps or [],
        channels=channels or [],
    )


def get_sort_state(
    sort_key: str | None = Query(default=None, pattern=SORT_KEY_PATTERN),
    sort_direction: str | None = Query(default=None, pattern=SORT_DIRECTION_PATTERN),
) -> SortState:
    settings = get_settings()
    return SortState(
        key=sort_key or settings.default_sort_key,
        direction=sort_direction or settings.default_sort_direction,
    )


@router.get("/deals")
def list_deals(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=100, ge=1, le=1000),
    service: SalesDashboardService = Depends(get_sales_dashboard_service),
) -> ResponseEnvelope[List[DealSummary]]:
    snapshot, deals, pagination = service.list_deals(page, page_size)
    return ResponseEnvelope(data=deals, pagination=pagination, meta=build_meta(snapshot))


@router.get("/options")
def dashboard_options(
    service: SalesDashboardService = Depends(get_sales_dashboard_service),
) -> ResponseEnvelope[DashboardOptions]:
    snapshot, options = service.get_options()
    return ResponseEnvelope(data=options, pagination=None, meta=build_meta(snapshot))


@router.get("/dashboard")
def sales_dashboard(
    selection: DealSelection = Depends(get_deal_selection),
    sort: SortState = Depends(get_sort_state),
    service: SalesDashboardService = Depends(get_sales_dashboard_service),
) -> ResponseEnvelope[DashboardView]:
    snapshot, view = service.get_dashboard(selection, sort)
    return ResponseEnvelope(
        data=view,
        pagination=None,
        meta=build_meta(snapshot, fiscal_period=selection.fiscal_period),
    )


@router.get("/rep-performance")
def rep_performance(
    toggle: str | None = Query(default=None, pattern=SORT_KEY_PATTERN),
    selection: DealSelection = Depends(get_deal_selection),
    sort: SortState = Depends(get_sort_state),
    service: SalesDashboardService = Depends(get_sales_dashboard_service),
) -> ResponseEnvelope[RepPerformanceResponse]:
    snapshot, data = service.get_rep_performance(selection, sort, toggle=toggle)
    return ResponseEnvelope(
        data=data,
        pagination=None,
        meta=build_meta(snapshot, fiscal_period=selection.fiscal_period),
    )


@router.post("/refresh")
def refresh_snapshot(
    service: SalesDashboardService = Depends(get_sales_dashboard_service),
) -> ResponseEnvelope[SnapshotStatus]:
    status = service.refresh()
    return ResponseEnvelope(
        data=status,
        pagination=None,
        meta=Meta(
            as_of_date=status.fetched_at[:10],
            source=status.source,
            calculation_version="v1",
            generated_at=status.fetched_at,
        ),
    )
