from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sales_dashboard.analytics.deal_normalizer import normalize_deal
from sales_dashboard.core.config import get_settings
from sales_dashboard.core.sheets import GoogleSheetsClient
from sales_dashboard.models.deals import DealRecord

logger = logging.getLogger(__name__)


class DealsRepository:
    def __init__(self, client: Optional[GoogleSheetsClient] = None, value_range: Optional[str] = None) -> None:
        self.client = client or GoogleSheetsClient()
        self.value_range = value_range or get_settings().google_sheet_range

    def list_rows(self) -> List[Dict[str, Any]]:
        values = self.client.get_values(self.value_range)
        if not values:
            return []
        header = [str(cell).strip() for cell in values[0]]
        rows: List[Dict[str, Any]] = []
        for raw in values[1:]:
            if not any(str(cell).strip() for cell in raw):
                continue
            padded = list(raw) + [None] * (len(header) - len(raw))
            rows.append({column: padded[index] for index, column in enumerate(header) if column})
        return rows

    def list_deals(self) -> List[DealRecord]:
        rows = self.list_rows()
        deals = [normalize_deal(row) for row in rows]
        logger.debug("Normalized %s deal rows", len(deals))
        return deals
