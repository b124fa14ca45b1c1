from __future__ import annotations

from datetime import date

import httpx
import pytest

from conftest import make_settings
from sales_dashboard.core.errors import UpstreamUnavailableError
from sales_dashboard.core.sheets import GoogleSheetsClient
from sales_dashboard.repositories.deals_repository import DealsRepository

HEADER = ["案件ID", "商流", "売上（税抜）", "粗利（税抜）", "案件フェーズ", "受注月", "納品月", "営業担当"]


def _client(handler, **settings_overrides) -> GoogleSheetsClient:
    settings = make_settings(**settings_overrides)
    return GoogleSheetsClient(settings=settings, http_client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_list_deals_pairs_header_with_rows() -> None:
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "range": "Sheet1!A1:Z3",
                "majorDimension": "ROWS",
                "values": [
                    HEADER,
                    ["1", "直販", "¥500,000", "¥150,000", "納品完了", "2024年4月", "2024年5月", "佐藤 太郎"],
                    [],
                    ["2", "代理店A", "300000", "90000", "納品完了", "2024年4月"],
                ],
            },
        )

    repository = DealsRepository(client=_client(handler), value_range="Sheet1!A1:Z")
    deals = repository.list_deals()

    assert len(deals) == 2
    assert deals[0].sales == 500000
    assert deals[0].delivery_date == date(2024, 5, 1)
    assert deals[1].delivery_date is None
    assert deals[1].sales_rep is None

    request = requests[0]
    assert request.url.params["key"] == "test-key"
    assert request.url.params["valueRenderOption"] == "FORMATTED_VALUE"
    assert "/spreadsheets/test-sheet/values/" in request.url.path


def test_access_token_is_sent_as_bearer() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["authorization"] = request.headers.get("Authorization")
        seen["key"] = request.url.params.get("key")
        return httpx.Response(200, json={"values": [HEADER]})

    client = _client(handler, GOOGLE_SHEETS_ACCESS_TOKEN="token-1")
    assert DealsRepository(client=client, value_range="A1:Z").list_deals() == []
    assert seen == {"authorization": "Bearer token-1", "key": None}


def test_empty_sheet_returns_no_rows() -> None:
    client = _client(lambda request: httpx.Response(200, json={"range": "Sheet1!A1:Z"}))
    assert DealsRepository(client=client, value_range="A1:Z").list_rows() == []


def test_upstream_error_is_raised_as_app_error() -> None:
    client = _client(lambda request: httpx.Response(503, json={"error": {"message": "unavailable"}}))
    with pytest.raises(UpstreamUnavailableError) as excinfo:
        DealsRepository(client=client, value_range="A1:Z").list_deals()
    assert excinfo.value.status_code == 502
    assert excinfo.value.details == {"reason": "status 503"}


def test_transport_error_is_raised_as_app_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamUnavailableError):
        DealsRepository(client=_client(handler), value_range="A1:Z").list_deals()


def test_client_requires_credentials() -> None:
    settings = make_settings(GOOGLE_SHEETS_API_KEY=None)
    with pytest.raises(ValueError):
        GoogleSheetsClient(settings=settings, http_client=httpx.Client())


def test_non_json_body_is_raised_as_app_error() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(UpstreamUnavailableError) as excinfo:
        DealsRepository(client=client, value_range="A1:Z").list_deals()
    assert excinfo.value.details == {"reason": "invalid_json"}
