import json

import pytest

from lexiquiz.game.sessions.store import RedisSessionStore
from lexiquiz.game.sessions.types import Session


class FakePipeline:
    def __init__(self, client: "FakeRedis") -> None:
        self._client = client
        self._ops: list[tuple[str, str, int | None]] = []

    def set(self, key: str, value: str, ex: int | None = None) -> "FakePipeline":
        self._ops.append((key, value, ex))
        return self

    async def execute(self) -> list[bool]:
        for key, value, ex in self._ops:
            await self._client.set(key, value, ex=ex)
        return [True] * len(self._ops)


class FakeRedis:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.data[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self)


class Clock:
    def __init__(self, value: float) -> None:
        self.value = value

    def __call__(self) -> float:
        return self.value


def _session(owner_id: int = 9, now_ts: int = 1_000) -> Session:
    return Session.create(
        owner_id=owner_id,
        level="a1",
        mode="gr-ru",
        category="verbs",
        candidate_ids=range(4),
        now_ts=now_ts,
        ttl_seconds=600,
    )


@pytest.mark.asyncio
async def test_put_writes_record_and_owner_index() -> None:
    client = FakeRedis()
    clock = Clock(1_100)
    store = RedisSessionStore(client, key_prefix="lq", clock=clock)
    session = _session()

    stored = await store.put(session)

    assert stored.updated_at == 1_100
    assert client.data["lq:owner:9"] == session.id
    assert json.loads(client.data[f"lq:session:{session.id}"])["remaining_ids"] == [0, 1, 2, 3]
    assert client.ttls[f"lq:session:{session.id}"] == 500
    assert await store.get(session.id) == stored
    assert await store.get_latest_by_owner(9) == stored


@pytest.mark.asyncio
async def test_owner_index_follows_latest_session() -> None:
    client = FakeRedis()
    store = RedisSessionStore(client, key_prefix="lq", clock=Clock(1_000))
    first = await store.put(_session())
    second = await store.put(_session())

    await store.delete(first.id)

    assert await store.get(first.id) is None
    assert await store.get_latest_by_owner(9) == second

    await store.delete(second.id)

    assert await store.get_latest_by_owner(9) is None
    assert "lq:owner:9" not in client.data


@pytest.mark.asyncio
async def test_expired_and_unreadable_records_read_as_missing() -> None:
    client = FakeRedis()
    clock = Clock(1_000)
    store = RedisSessionStore(client, key_prefix="lq", clock=clock)
    session = await store.put(_session())
    client.data["lq:session:broken"] = "{not json"

    clock.value = 1_600

    assert await store.get(session.id) is None
    assert await store.get("broken") is None
    assert await store.get("absent") is None


@pytest.mark.asyncio
async def test_legacy_string_fields_are_coerced_on_read() -> None:
    client = FakeRedis()
    store = RedisSessionStore(client, key_prefix="lq", clock=Clock(1_000))
    client.data["lq:session:abc"] = json.dumps(
        {
            "id": "abc",
            "owner_id": "9",
            "level": "A1",
            "mode": "write",
            "remaining_ids": ["1", "2"],
            "total_asked": "1",
            "correct_count": "1",
            "current": {"answer_key_id": "0", "options": ["0"], "correct_index": "0"},
            "expires_at": "2000",
            "updated_at": "900",
        }
    )

    session = await store.get("abc")

    assert session is not None
    assert session.owner_id == 9
    assert session.level == "a1"
    assert session.remaining_ids == frozenset({1, 2})
    assert session.total_count == 4
    assert session.current is not None
    assert session.current.answer_key_id == 0
