from lexiquiz.game.variants.base import (
    CallbackAnswerInput,
    GameDependencies,
    GameVariant,
    TextAnswerInput,
)
from lexiquiz.game.variants.choice import ChoiceVariant
from lexiquiz.game.variants.fact_quiz import FactQuizVariant
from lexiquiz.game.variants.free_text import FreeTextVariant
from lexiquiz.game.variants.text_topic import TextTopicVariant

__all__ = [
    "CallbackAnswerInput",
    "ChoiceVariant",
    "FactQuizVariant",
    "FreeTextVariant",
    "GameDependencies",
    "GameVariant",
    "TextAnswerInput",
    "TextTopicVariant",
]
