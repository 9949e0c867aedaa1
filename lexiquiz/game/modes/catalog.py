from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TrainingMode(str, Enum):
    GR_RU = "gr-ru"
    RU_GR = "ru-gr"
    WRITE = "write"
    TEXT_TOPIC = "text-topic"
    FACT_QUIZ = "fact-quiz"


class WordCategory(str, Enum):
    VERBS = "verbs"
    NOUNS = "nouns"
    ADJECTIVES = "adjectives"
    ADVERBS = "adverbs"


class VariantKind(str, Enum):
    CHOICE = "choice"
    FREE_TEXT = "free_text"
    TEXT_TOPIC = "text_topic"
    FACT_QUIZ = "fact_quiz"


class PoolKind(str, Enum):
    TERMS = "terms"
    TEXT_TOPICS = "text_topics"
    FACT_TOPICS = "fact_topics"


class PromptDirection(str, Enum):
    # Target-language form shown, source-language translations as options.
    FORWARD = "forward"
    REVERSE = "reverse"


DEFAULT_MODE = TrainingMode.GR_RU
DEFAULT_CATEGORY = WordCategory.VERBS
LEVELS: tuple[str, ...] = ("a1", "a2", "b1", "b2")


@dataclass(frozen=True, slots=True)
class ModeDescriptor:
    mode: TrainingMode
    variant: VariantKind
    pool_kind: PoolKind
    direction: PromptDirection = PromptDirection.FORWARD
    categories: tuple[WordCategory, ...] | None = None

    @property
    def has_category_facet(self) -> bool:
        return self.categories is not None


MODE_DESCRIPTORS: dict[TrainingMode, ModeDescriptor] = {
    TrainingMode.GR_RU: ModeDescriptor(
        mode=TrainingMode.GR_RU,
        variant=VariantKind.CHOICE,
        pool_kind=PoolKind.TERMS,
        direction=PromptDirection.FORWARD,
        categories=tuple(WordCategory),
    ),
    TrainingMode.RU_GR: ModeDescriptor(
        mode=TrainingMode.RU_GR,
        variant=VariantKind.CHOICE,
        pool_kind=PoolKind.TERMS,
        direction=PromptDirection.REVERSE,
        categories=tuple(WordCategory),
    ),
    TrainingMode.WRITE: ModeDescriptor(
        mode=TrainingMode.WRITE,
        variant=VariantKind.FREE_TEXT,
        pool_kind=PoolKind.TERMS,
        direction=PromptDirection.REVERSE,
    ),
    TrainingMode.TEXT_TOPIC: ModeDescriptor(
        mode=TrainingMode.TEXT_TOPIC,
        variant=VariantKind.TEXT_TOPIC,
        pool_kind=PoolKind.TEXT_TOPICS,
    ),
    TrainingMode.FACT_QUIZ: ModeDescriptor(
        mode=TrainingMode.FACT_QUIZ,
        variant=VariantKind.FACT_QUIZ,
        pool_kind=PoolKind.FACT_TOPICS,
    ),
}


def parse_mode(raw: str | None) -> TrainingMode:
    if raw:
        try:
            return TrainingMode(raw.strip().lower())
        except ValueError:
            pass
    return DEFAULT_MODE


def parse_category(raw: str | None) -> WordCategory | None:
    if not raw:
        return None
    try:
        return WordCategory(raw.strip().lower())
    except ValueError:
        return None


def normalize_level(raw: str | None) -> str | None:
    if raw is None:
        return None
    level = raw.strip().lower()
    if level in LEVELS:
        return level
    return None


def describe_mode(mode: TrainingMode | str) -> ModeDescriptor:
    if not isinstance(mode, TrainingMode):
        mode = parse_mode(mode)
    return MODE_DESCRIPTORS[mode]
