from __future__ import annotations

from lexiquiz.game.modes.catalog import TrainingMode, WordCategory

MODE_LABELS: dict[str, str] = {
    TrainingMode.GR_RU.value: "Greek → Russian",
    TrainingMode.RU_GR.value: "Russian → Greek",
    TrainingMode.WRITE.value: "Write the word",
    TrainingMode.TEXT_TOPIC.value: "Text topic",
    TrainingMode.FACT_QUIZ.value: "Fact quiz",
}

CATEGORY_LABELS: dict[str, str] = {
    WordCategory.VERBS.value: "Verbs",
    WordCategory.NOUNS.value: "Nouns",
    WordCategory.ADJECTIVES.value: "Adjectives",
    WordCategory.ADVERBS.value: "Adverbs",
}


def display_mode_label(mode_code: str) -> str:
    label = MODE_LABELS.get(mode_code)
    if label is not None:
        return label
    return mode_code.replace("-", " ")


def display_category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category.capitalize())


def display_level_label(level: str) -> str:
    return level.upper()
