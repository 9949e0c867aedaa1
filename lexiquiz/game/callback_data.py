from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from lexiquiz.game.modes.catalog import (
    DEFAULT_CATEGORY,
    TrainingMode,
    WordCategory,
    normalize_level,
    parse_category,
    parse_mode,
)

CHOICE_PREFIX = "s"
FACT_PREFIX = "f"
TEXT_TOPIC_PREFIX = "t"

MODE_RE = re.compile(r"^mode:([^|]*)$")
CATEGORY_RE = re.compile(r"^category:([^|]+)\|mode:([^|]*)$")
LEVEL_RE = re.compile(r"^level:([a-zA-Z0-9]+)\|mode:([^|]*)(?:\|category:([^|]+))?$")
ANSWER_RE = re.compile(r"^([sft])=([^&]+)&a=(\d+)$")


@dataclass(frozen=True, slots=True)
class ModeSelection:
    mode: TrainingMode


@dataclass(frozen=True, slots=True)
class CategorySelection:
    mode: TrainingMode
    category: WordCategory


@dataclass(frozen=True, slots=True)
class LevelSelection:
    mode: TrainingMode
    level: str
    category: WordCategory | None = None


@dataclass(frozen=True, slots=True)
class AnswerCallbackData:
    prefix: str
    session_id: str
    answer_index: int


MenuIntent = Union[ModeSelection, CategorySelection, LevelSelection]
CallbackIntent = Union[ModeSelection, CategorySelection, LevelSelection, AnswerCallbackData]


def parse_menu_callback(data: str | None) -> MenuIntent | None:
    if not data:
        return None

    match = MODE_RE.match(data)
    if match is not None:
        return ModeSelection(mode=parse_mode(match.group(1)))

    match = CATEGORY_RE.match(data)
    if match is not None:
        return CategorySelection(
            mode=parse_mode(match.group(2)),
            category=parse_category(match.group(1)) or DEFAULT_CATEGORY,
        )

    match = LEVEL_RE.match(data)
    if match is not None:
        level = normalize_level(match.group(1))
        if level is None:
            return None
        return LevelSelection(
            mode=parse_mode(match.group(2)),
            level=level,
            category=parse_category(match.group(3)),
        )
    return None


def parse_answer_callback(data: str | None, *, prefix: str | None = None) -> AnswerCallbackData | None:
    if not data:
        return None
    match = ANSWER_RE.match(data)
    if match is None:
        return None
    if prefix is not None and match.group(1) != prefix:
        return None
    return AnswerCallbackData(
        prefix=match.group(1),
        session_id=match.group(2),
        answer_index=int(match.group(3)),
    )


def parse_callback_data(data: str | None) -> CallbackIntent | None:
    return parse_menu_callback(data) or parse_answer_callback(data)


def format_mode_callback(mode: TrainingMode) -> str:
    return f"mode:{mode.value}"


def format_category_callback(mode: TrainingMode, category: WordCategory) -> str:
    return f"category:{category.value}|mode:{mode.value}"


def format_level_callback(mode: TrainingMode, level: str, category: WordCategory | None = None) -> str:
    suffix = f"|category:{category.value}" if category is not None else ""
    return f"level:{level}|mode:{mode.value}{suffix}"


def format_answer_callback(prefix: str, session_id: str, answer_index: int) -> str:
    return f"{prefix}={session_id}&a={answer_index}"
