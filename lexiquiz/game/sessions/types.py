from __future__ import annotations

import secrets
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

MAX_RECENT_FACTS = 20
SESSION_ID_BYTES = 8


def new_session_id() -> str:
    return secrets.token_hex(SESSION_ID_BYTES)


def _coerce_int(value: object, *, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, (str, bytes)):
        try:
            return int(float(value))
        except ValueError:
            return default
    return default


def _coerce_optional_int(value: object) -> int | None:
    if value is None or value == "":
        return None
    return _coerce_int(value)


def _coerce_optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def _coerce_int_list(value: object) -> list[int]:
    if not isinstance(value, (list, tuple, set, frozenset)):
        return []
    return [_coerce_int(item) for item in value]


def _coerce_str_list(value: object) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value]


@dataclass(frozen=True, slots=True)
class SessionQuestion:
    answer_key_id: int
    options: tuple[int, ...]
    correct_index: int
    pending_message_id: int | None = None
    prompt_text: str | None = None
    question_text: str | None = None
    answer_option_texts: tuple[str, ...] | None = None

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "answer_key_id": self.answer_key_id,
            "options": list(self.options),
            "correct_index": self.correct_index,
        }
        if self.pending_message_id is not None:
            record["pending_message_id"] = self.pending_message_id
        if self.prompt_text is not None:
            record["prompt_text"] = self.prompt_text
        if self.question_text is not None:
            record["question_text"] = self.question_text
        if self.answer_option_texts is not None:
            record["answer_option_texts"] = list(self.answer_option_texts)
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> SessionQuestion:
        option_texts = record.get("answer_option_texts")
        return cls(
            answer_key_id=_coerce_int(record.get("answer_key_id")),
            options=tuple(_coerce_int_list(record.get("options"))),
            correct_index=_coerce_int(record.get("correct_index")),
            pending_message_id=_coerce_optional_int(record.get("pending_message_id")),
            prompt_text=_coerce_optional_str(record.get("prompt_text")),
            question_text=_coerce_optional_str(record.get("question_text")),
            answer_option_texts=(
                tuple(_coerce_str_list(option_texts)) if option_texts is not None else None
            ),
        )


@dataclass(frozen=True, slots=True)
class Session:
    id: str
    owner_id: int
    level: str
    mode: str
    total_count: int
    expires_at: int
    updated_at: int
    category: str | None = None
    remaining_ids: frozenset[int] = field(default_factory=frozenset)
    total_asked: int = 0
    correct_count: int = 0
    current: SessionQuestion | None = None
    recent_facts: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        *,
        owner_id: int,
        level: str,
        mode: str,
        category: str | None,
        candidate_ids: Iterable[int],
        now_ts: int,
        ttl_seconds: int,
    ) -> Session:
        remaining = frozenset(candidate_ids)
        return cls(
            id=new_session_id(),
            owner_id=owner_id,
            level=level,
            mode=mode,
            category=category,
            remaining_ids=remaining,
            total_count=len(remaining),
            expires_at=now_ts + ttl_seconds,
            updated_at=now_ts,
        )

    @property
    def question_number(self) -> int:
        return self.total_asked + 1

    @property
    def is_completed(self) -> bool:
        return self.current is None and not self.remaining_ids

    def with_question(
        self,
        question: SessionQuestion,
        *,
        remaining_ids: frozenset[int],
    ) -> Session:
        return replace(self, current=question, remaining_ids=remaining_ids)

    def with_pending_message(self, message_id: int) -> Session:
        if self.current is None:
            return self
        return replace(self, current=replace(self.current, pending_message_id=message_id))

    def scored(self, *, is_correct: bool) -> Session:
        return replace(
            self,
            total_asked=self.total_asked + 1,
            correct_count=self.correct_count + (1 if is_correct else 0),
            current=None,
        )

    def with_recent_fact(self, fact: str) -> Session:
        facts = (*self.recent_facts, fact)[-MAX_RECENT_FACTS:]
        return replace(self, recent_facts=facts)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "level": self.level,
            "mode": self.mode,
            "category": self.category,
            "remaining_ids": sorted(self.remaining_ids),
            "total_asked": self.total_asked,
            "correct_count": self.correct_count,
            "total_count": self.total_count,
            "current": self.current.to_record() if self.current is not None else None,
            "recent_facts": list(self.recent_facts),
            "expires_at": self.expires_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Session:
        current = record.get("current")
        remaining = frozenset(_coerce_int_list(record.get("remaining_ids")))
        total_asked = _coerce_int(record.get("total_asked"))
        raw_total = _coerce_optional_int(record.get("total_count"))
        if raw_total is None:
            raw_total = total_asked + len(remaining) + (1 if isinstance(current, dict) else 0)
        return cls(
            id=str(record["id"]),
            owner_id=_coerce_int(record.get("owner_id")),
            level=str(record.get("level", "")).lower(),
            mode=str(record.get("mode", "")),
            category=_coerce_optional_str(record.get("category")),
            remaining_ids=remaining,
            total_asked=total_asked,
            correct_count=_coerce_int(record.get("correct_count")),
            total_count=raw_total,
            current=SessionQuestion.from_record(current) if isinstance(current, dict) else None,
            recent_facts=tuple(_coerce_str_list(record.get("recent_facts")))[-MAX_RECENT_FACTS:],
            expires_at=_coerce_int(record.get("expires_at")),
            updated_at=_coerce_int(record.get("updated_at")),
        )
