import httpx
import pytest

from lexiquiz.game.questions.sheets_client import GoogleSheetsClient, SheetsClientError


def _client(handler, *, spreadsheet_id: str = "sheet-123") -> GoogleSheetsClient:
    client = GoogleSheetsClient(
        spreadsheet_id=spreadsheet_id,
        service_account_json="{}",
        transport=httpx.MockTransport(handler),
    )

    async def _token() -> str:
        return "token-1"

    client._get_access_token = _token
    return client


@pytest.mark.asyncio
async def test_fetch_rows_reads_values_range() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"values": [["σπίτι", "дом"], "junk", ["νερό", "вода"]]})

    rows = await _client(handler).fetch_rows("verbs_a1")

    assert rows == [["σπίτι", "дом"], ["νερό", "вода"]]
    assert requests[0].url.path == "/v4/spreadsheets/sheet-123/values/verbs_a1!A2:B"
    assert requests[0].headers["Authorization"] == "Bearer token-1"


@pytest.mark.asyncio
async def test_fetch_rows_of_empty_sheet() -> None:
    rows = await _client(lambda request: httpx.Response(200, json={"range": "fact_a1!A2:B"})).fetch_rows("fact_a1")

    assert rows == []


@pytest.mark.asyncio
async def test_fetch_rows_wraps_http_errors() -> None:
    with pytest.raises(SheetsClientError):
        await _client(lambda request: httpx.Response(403, json={})).fetch_rows("text_b1")


@pytest.mark.asyncio
async def test_missing_configuration_is_rejected() -> None:
    with pytest.raises(SheetsClientError):
        await _client(lambda request: httpx.Response(200, json={}), spreadsheet_id="").fetch_rows("verbs_a1")

    unconfigured = GoogleSheetsClient(spreadsheet_id="sheet-123", service_account_json="")
    with pytest.raises(SheetsClientError):
        await unconfigured.fetch_rows("verbs_a1")
