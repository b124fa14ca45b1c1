from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from sales_dashboard.core.config import Settings, get_settings
from sales_dashboard.core.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class GoogleSheetsClient:
    """Read-only access to the Sheets v4 values endpoint."""

    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self, settings: Optional[Settings] = None, http_client: Optional[httpx.Client] = None) -> None:
        settings = settings or get_settings()
        self.base_url = settings.google_sheets_base_url.rstrip("/")
        self.sheet_id = settings.google_sheet_id
        self.api_key = settings.google_sheets_api_key
        self.access_token = settings.google_sheets_access_token
        if not self.sheet_id:
            raise ValueError("Google sheet id is required")
        if not self.api_key and not self.access_token:
            raise ValueError("Google Sheets API key or access token is required")
        self._client = http_client or self._get_shared_client(settings.google_sheets_timeout_seconds)

    @classmethod
    def _get_shared_client(cls, timeout: float) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=timeout,
                    limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                )
        return cls._shared_client

    def get_values(self, value_range: str) -> List[List[Any]]:
        params: Dict[str, str] = {"majorDimension": "ROWS", "valueRenderOption": "FORMATTED_VALUE"}
        headers: Dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        elif self.api_key:
            params["key"] = self.api_key

        url = f"{self.base_url}/spreadsheets/{quote(self.sheet_id, safe='')}/values/{quote(value_range, safe='')}"
        try:
            response = self._client.get(url, params=params, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Sheets values request failed with status %s", exc.response.status_code)
            raise UpstreamUnavailableError(reason=f"status {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Sheets values request failed: %s", exc)
            raise UpstreamUnavailableError(reason=exc.__class__.__name__) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Sheets values response was not valid JSON")
            raise UpstreamUnavailableError(reason="invalid_json") from exc
        values = payload.get("values") if isinstance(payload, dict) else None
        if not isinstance(values, list):
            return []
        return [row for row in values if isinstance(row, list)]
