from __future__ import annotations

from typing import List, Optional, Tuple

from sales_dashboard.analytics.dashboard_view import (
    assemble_dashboard,
    build_options,
    build_rep_performance,
)
from sales_dashboard.analytics.rep_sorting import toggle_sort
from sales_dashboard.core.cache import SnapshotCache
from sales_dashboard.core.config import Settings, get_settings
from sales_dashboard.models.deals import DealSnapshot, ReferenceDate
from sales_dashboard.schemas.sales_dashboard import (
    DashboardOptions,
    DashboardView,
    DealSelection,
    DealSummary,
    RepPerformanceResponse,
    SnapshotStatus,
    SortState,
)
from sales_dashboard.shared.response import Pagination, paginate_list


class SalesDashboardService:
    def __init__(self, snapshot_cache: SnapshotCache, settings: Optional[Settings] = None) -> None:
        self.snapshot_cache = snapshot_cache
        self.settings = settings or get_settings()

    @property
    def reference(self) -> ReferenceDate:
        return ReferenceDate(self.settings.fiscal_reference_date)

    def get_snapshot(self) -> DealSnapshot:
        return self.snapshot_cache.get()

    def list_deals(self, page: int, page_size: int) -> Tuple[DealSnapshot, List[DealSummary], Pagination]:
        snapshot = self.get_snapshot()
        items, pagination = paginate_list(snapshot.deals, page, page_size)
        return snapshot, [DealSummary.model_validate(deal.model_dump()) for deal in items], pagination

    def get_options(self) -> Tuple[DealSnapshot, DashboardOptions]:
        snapshot = self.get_snapshot()
        options = build_options(
            snapshot.deals,
            self.settings.fiscal_year_start_month,
            self.settings.fiscal_base_year,
        )
        return snapshot, options

    def get_dashboard(self, selection: DealSelection, sort: SortState) -> Tuple[DealSnapshot, DashboardView]:
        snapshot = self.get_snapshot()
        view = assemble_dashboard(
            snapshot.deals,
            selection,
            sort,
            start_month=self.settings.fiscal_year_start_month,
            base_year=self.settings.fiscal_base_year,
            reference=self.reference,
        )
        return snapshot, view

    def get_rep_performance(
        self, selection: DealSelection, sort: SortState, toggle: Optional[str] = None
    ) -> Tuple[DealSnapshot, RepPerformanceResponse]:
        if toggle:
            sort = toggle_sort(sort, toggle)
        snapshot = self.get_snapshot()
        rows = build_rep_performance(
            snapshot.deals,
            selection,
            sort,
            start_month=self.settings.fiscal_year_start_month,
            base_year=self.settings.fiscal_base_year,
            reference=self.reference,
        )
        return snapshot, RepPerformanceResponse(selection=selection, sort=sort, rows=rows)

    def refresh(self) -> SnapshotStatus:
        snapshot = self.snapshot_cache.refresh()
        return SnapshotStatus(
            deal_count=len(snapshot.deals),
            fetched_at=snapshot.fetched_at.isoformat(),
            source=snapshot.source,
        )
