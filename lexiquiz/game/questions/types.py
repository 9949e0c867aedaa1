from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union


def _cell(row: Sequence[object], index: int) -> str:
    if index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else str(value).strip()


@dataclass(frozen=True, slots=True)
class Term:
    greek: str
    russian: str

    @classmethod
    def from_row(cls, row: Sequence[object]) -> Term | None:
        greek, russian = _cell(row, 0), _cell(row, 1)
        if not greek or not russian:
            return None
        return cls(greek=greek, russian=russian)


@dataclass(frozen=True, slots=True)
class TextTopic:
    text: str
    topic: str

    @classmethod
    def from_row(cls, row: Sequence[object]) -> TextTopic | None:
        text, topic = _cell(row, 0), _cell(row, 1)
        if not text or not topic:
            return None
        return cls(text=text, topic=topic)


@dataclass(frozen=True, slots=True)
class FactTopic:
    title: str
    prompt: str

    @classmethod
    def from_row(cls, row: Sequence[object]) -> FactTopic | None:
        title, prompt = _cell(row, 0), _cell(row, 1)
        if not title or not prompt:
            return None
        return cls(title=title, prompt=prompt)


PoolItem = Union[Term, TextTopic, FactTopic]


@dataclass(frozen=True, slots=True)
class GeneratedFact:
    fact: str
    question: str
    options: tuple[str, str, str, str]
    correct_index: int
