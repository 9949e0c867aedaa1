from __future__ import annotations

import asyncio
from dataclasses import dataclass
from time import monotonic
from typing import Protocol, Sequence

import structlog

from lexiquiz.core.config import get_settings
from lexiquiz.game.modes.catalog import DEFAULT_CATEGORY, PoolKind, describe_mode
from lexiquiz.game.questions.sheets_client import GoogleSheetsClient
from lexiquiz.game.questions.types import FactTopic, PoolItem, Term, TextTopic

logger = structlog.get_logger(__name__)


class RowSource(Protocol):
    async def fetch_rows(self, sheet_name: str, *, cell_range: str = "A2:B") -> list[list[object]]: ...


class PoolProvider(Protocol):
    async def load(
        self,
        *,
        level: str,
        mode: str,
        category: str | None = None,
    ) -> Sequence[PoolItem]: ...


@dataclass(slots=True)
class _PoolCacheEntry:
    loaded_at_mono: float
    items: tuple[PoolItem, ...]


_POOL_CACHE: dict[tuple[str, str, str | None], _PoolCacheEntry] = {}
_POOL_CACHE_LOCK = asyncio.Lock()


def _clamp_cache_ttl_seconds(value: int) -> int:
    return max(1, min(3600, int(value)))


def clear_pool_cache() -> None:
    _POOL_CACHE.clear()


def sheet_name_for(pool_kind: PoolKind, *, level: str, category: str | None) -> str:
    level = level.lower()
    if pool_kind is PoolKind.TEXT_TOPICS:
        return f"text_{level}"
    if pool_kind is PoolKind.FACT_TOPICS:
        return f"fact_{level}"
    return f"{category or DEFAULT_CATEGORY.value}_{level}"


def parse_rows(pool_kind: PoolKind, rows: Sequence[Sequence[object]]) -> tuple[PoolItem, ...]:
    parser = {
        PoolKind.TERMS: Term.from_row,
        PoolKind.TEXT_TOPICS: TextTopic.from_row,
        PoolKind.FACT_TOPICS: FactTopic.from_row,
    }[pool_kind]
    items: list[PoolItem] = []
    for row in rows:
        item = parser(row)
        if item is not None:
            items.append(item)
    return tuple(items)


class SheetsPoolProvider:
    def __init__(self, source: RowSource, *, cache_ttl_seconds: int | None = None) -> None:
        self._source = source
        self._cache_ttl_seconds = cache_ttl_seconds

    def _ttl_seconds(self) -> int:
        if self._cache_ttl_seconds is not None:
            return _clamp_cache_ttl_seconds(self._cache_ttl_seconds)
        return _clamp_cache_ttl_seconds(get_settings().pool_cache_ttl_seconds)

    async def load(
        self,
        *,
        level: str,
        mode: str,
        category: str | None = None,
    ) -> tuple[PoolItem, ...]:
        pool_kind = describe_mode(mode).pool_kind
        level = level.lower()
        if pool_kind is PoolKind.TERMS:
            category = category or DEFAULT_CATEGORY.value
        else:
            category = None

        cache_key = (pool_kind.value, level, category)
        ttl_seconds = self._ttl_seconds()
        cached = _POOL_CACHE.get(cache_key)
        if cached is not None and (monotonic() - cached.loaded_at_mono) <= ttl_seconds:
            return cached.items

        async with _POOL_CACHE_LOCK:
            cached = _POOL_CACHE.get(cache_key)
            if cached is not None and (monotonic() - cached.loaded_at_mono) <= ttl_seconds:
                return cached.items

            sheet_name = sheet_name_for(pool_kind, level=level, category=category)
            rows = await self._source.fetch_rows(sheet_name)
            items = parse_rows(pool_kind, rows)
            _POOL_CACHE[cache_key] = _PoolCacheEntry(loaded_at_mono=monotonic(), items=items)
            logger.info(
                "question_pool_loaded",
                sheet_name=sheet_name,
                pool_kind=pool_kind.value,
                items=len(items),
            )
            return items


def build_pool_provider() -> SheetsPoolProvider:
    settings = get_settings()
    client = GoogleSheetsClient(
        spreadsheet_id=settings.google_sheets_id,
        service_account_json=settings.google_service_account_json,
    )
    return SheetsPoolProvider(client)
