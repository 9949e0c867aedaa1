from __future__ import annotations

import json
import time
from dataclasses import replace
from typing import Callable, Protocol

import redis.asyncio as redis
import structlog

from lexiquiz.core.config import get_settings
from lexiquiz.game.sessions.types import Session

logger = structlog.get_logger(__name__)

_redis: redis.Redis | None = None


class SessionStore(Protocol):
    async def get(self, session_id: str) -> Session | None: ...

    async def get_latest_by_owner(self, owner_id: int) -> Session | None: ...

    async def put(self, session: Session) -> Session: ...

    async def delete(self, session_id: str) -> None: ...


def get_redis() -> redis.Redis:
    global _redis
    if _redis is None:
        _redis = redis.from_url(get_settings().redis_url, decode_responses=True)
    return _redis


async def close_redis() -> None:
    global _redis
    if _redis is None:
        return
    await _redis.aclose()
    _redis = None


class RedisSessionStore:
    """Session records as JSON strings plus an owner -> latest session id index.

    Writes are unconditional: two concurrent answers against one session
    both land and the later put wins.
    """

    def __init__(
        self,
        client: redis.Redis,
        *,
        key_prefix: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._prefix = key_prefix
        self._clock = clock

    def _session_key(self, session_id: str) -> str:
        return f"{self._prefix}:session:{session_id}"

    def _owner_key(self, owner_id: int) -> str:
        return f"{self._prefix}:owner:{owner_id}"

    async def get(self, session_id: str) -> Session | None:
        raw = await self._client.get(self._session_key(session_id))
        if raw is None:
            return None
        try:
            record = json.loads(raw)
            session = Session.from_record(record)
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning(
                "session_record_unreadable",
                session_id=session_id,
                error_type=type(exc).__name__,
            )
            return None
        if session.expires_at and session.expires_at <= int(self._clock()):
            return None
        return session

    async def get_latest_by_owner(self, owner_id: int) -> Session | None:
        session_id = await self._client.get(self._owner_key(owner_id))
        if not session_id:
            return None
        return await self.get(str(session_id))

    async def put(self, session: Session) -> Session:
        now_ts = int(self._clock())
        stored = replace(session, updated_at=now_ts)
        ttl_seconds = max(1, stored.expires_at - now_ts)
        payload = json.dumps(stored.to_record(), ensure_ascii=False)

        pipe = self._client.pipeline()
        pipe.set(self._session_key(stored.id), payload, ex=ttl_seconds)
        pipe.set(self._owner_key(stored.owner_id), stored.id, ex=ttl_seconds)
        await pipe.execute()
        return stored

    async def delete(self, session_id: str) -> None:
        session = await self.get(session_id)
        await self._client.delete(self._session_key(session_id))
        if session is None:
            return
        owner_key = self._owner_key(session.owner_id)
        if await self._client.get(owner_key) == session_id:
            await self._client.delete(owner_key)
