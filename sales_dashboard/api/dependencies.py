from __future__ import annotations

from functools import lru_cache

from sales_dashboard.core.cache import SnapshotCache
from sales_dashboard.core.config import get_settings
from sales_dashboard.repositories.deals_repository import DealsRepository
from sales_dashboard.services.sales_dashboard_service import SalesDashboardService


@lru_cache
def get_deals_repository() -> DealsRepository:
    return DealsRepository()


@lru_cache
def get_snapshot_cache() -> SnapshotCache:
    settings = get_settings()
    return SnapshotCache(
        loader=get_deals_repository().list_deals,
        ttl_seconds=settings.cache_ttl_seconds,
    )


def get_sales_dashboard_service() -> SalesDashboardService:
    return SalesDashboardService(snapshot_cache=get_snapshot_cache(), settings=get_settings())
