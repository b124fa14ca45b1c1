from __future__ import annotations

import os

os.environ.setdefault("GOOGLE_SHEET_ID", "test-sheet")
os.environ.setdefault("GOOGLE_SHEETS_API_KEY", "test-key")

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from sales_dashboard.analytics.deal_normalizer import normalize_deal
from sales_dashboard.api.dependencies import get_sales_dashboard_service
from sales_dashboard.core.cache import SnapshotCache
from sales_dashboard.core.config import Settings
from sales_dashboard.main import create_app
from sales_dashboard.models.deals import DealRecord
from sales_dashboard.services.sales_dashboard_service import SalesDashboardService


SAMPLE_ROWS: List[Dict[str, Any]] = [
    {"案件ID": "1", "商流": "直販", "売上（税抜）": "500000", "粗利（税抜）": "150000", "案件フェーズ": "納品完了",
     "受注月": "2024年4月", "納品月": "2024年5月", "営業担当": "佐藤 太郎"},
    {"案件ID": "2", "商流": "代理店A", "売上（税抜）": "300000", "粗利（税抜）": "90000", "案件フェーズ": "納品完了",
     "受注月": "2024年4月", "納品月": "2024年5月", "営業担当": "鈴木 一郎"},
    {"案件ID": "3", "商流": "代理店B", "売上（税抜）": "750000", "粗利（税抜）": "225000", "案件フェーズ": "受注済み",
     "受注月": "2024年5月", "納品月": "2024年6月", "営業担当": "高橋 花子"},
    {"案件ID": "6", "商流": "代理店A", "売上（税抜）": "450000", "粗利（税抜）": "135000", "案件フェーズ": "失注",
     "受注月": "2024年6月", "納品月": "2024年7月", "営業担当": "高橋 花子"},
    {"案件ID": "12", "商流": "オンライン", "売上（税抜）": "150000", "粗利（税抜）": "75000", "案件フェーズ": "提案中",
     "受注月": "2024年12月", "納品月": "2025年1月", "営業担当": "鈴木 一郎"},
    {"案件ID": "15", "商流": "直販", "売上（税抜）": "400000", "粗利（税抜）": "120000", "案件フェーズ": "納品完了",
     "受注月": "2023年8月", "納品月": "2023年9月", "営業担当": "佐藤 太郎"},
    {"案件ID": "19", "商流": "直販", "売上（税抜）": "200000", "粗利（税抜）": "50000", "案件フェーズ": "受注済み",
     "受注月": "2025年3月", "納品月": "2025年4月", "営業担当": "佐藤 太郎"},
    {"案件ID": "20", "商流": "代理店B", "売上（税抜）": "100000", "粗利（税抜）": "20000", "案件フェーズ": "納品完了",
     "受注月": "2024年9月", "納品月": "未定", "営業担当": "高橋 花子"},
]


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {"GOOGLE_SHEET_ID": "test-sheet", "GOOGLE_SHEETS_API_KEY": "test-key"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def sample_deals() -> List[DealRecord]:
    return [normalize_deal(row) for row in SAMPLE_ROWS]


@pytest.fixture()
def dashboard_service(sample_deals: List[DealRecord]) -> SalesDashboardService:
    cache = SnapshotCache(loader=lambda: sample_deals, ttl_seconds=300)
    return SalesDashboardService(snapshot_cache=cache, settings=make_settings())


@pytest.fixture()
def client(dashboard_service: SalesDashboardService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_sales_dashboard_service] = lambda: dashboard_service
    return TestClient(app)
