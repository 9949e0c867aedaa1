from __future__ import annotations

import asyncio
import json
from typing import Any
from urllib.parse import quote

import httpx
import structlog
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2.service_account import Credentials as ServiceAccountCredentials

logger = structlog.get_logger(__name__)

SHEETS_VALUES_URL = "https://sheets.googleapis.com/v4/spreadsheets/{spreadsheet_id}/values/{range_ref}"
SHEETS_READONLY_SCOPES = ("https://www.googleapis.com/auth/spreadsheets.readonly",)


class SheetsClientError(Exception):
    pass


class GoogleSheetsClient:
    def __init__(
        self,
        *,
        spreadsheet_id: str,
        service_account_json: str,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._service_account_json = service_account_json
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._credentials: ServiceAccountCredentials | None = None

    def _load_credentials(self) -> ServiceAccountCredentials:
        if self._credentials is not None:
            return self._credentials
        if not self._service_account_json:
            raise SheetsClientError("GOOGLE_SERVICE_ACCOUNT_JSON is not configured")
        try:
            info = json.loads(self._service_account_json)
        except json.JSONDecodeError:
            with open(self._service_account_json, "r", encoding="utf-8") as fp:
                info = json.load(fp)
        self._credentials = ServiceAccountCredentials.from_service_account_info(
            info,
            scopes=SHEETS_READONLY_SCOPES,
        )
        return self._credentials

    async def _get_access_token(self) -> str:
        credentials = self._load_credentials()

        def _refresh_token() -> str:
            if not credentials.valid:
                credentials.refresh(GoogleAuthRequest())
            return credentials.token

        return await asyncio.to_thread(_refresh_token)

    async def fetch_rows(self, sheet_name: str, *, cell_range: str = "A2:B") -> list[list[Any]]:
        if not self._spreadsheet_id:
            raise SheetsClientError("GOOGLE_SHEETS_ID is not configured")
        token = await self._get_access_token()
        url = SHEETS_VALUES_URL.format(
            spreadsheet_id=self._spreadsheet_id,
            range_ref=quote(f"{sheet_name}!{cell_range}", safe="!:"),
        )
        async with httpx.AsyncClient(timeout=self._timeout_seconds, transport=self._transport) as client:
            try:
                response = await client.get(url, headers={"Authorization": f"Bearer {token}"})
                response.raise_for_status()
            except httpx.HTTPError as exc:
                logger.warning(
                    "sheets_fetch_failed",
                    sheet_name=sheet_name,
                    error_type=type(exc).__name__,
                )
                raise SheetsClientError(f"failed to read sheet {sheet_name}") from exc

        values = response.json().get("values")
        if not isinstance(values, list):
            return []
        return [row for row in values if isinstance(row, list)]
