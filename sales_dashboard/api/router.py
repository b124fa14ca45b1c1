from __future__ import annotations

from fastapi import APIRouter

from sales_dashboard.api.health import router as health_router
from sales_dashboard.api.sales_dashboard import router as sales_dashboard_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(sales_dashboard_router)
