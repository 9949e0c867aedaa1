from lexiquiz.bot.keyboards.menu import (
    build_category_keyboard,
    build_level_keyboard,
    build_mode_keyboard,
)
from lexiquiz.bot.keyboards.quiz import build_answer_keyboard, build_inline_keyboard

__all__ = [
    "build_answer_keyboard",
    "build_category_keyboard",
    "build_inline_keyboard",
    "build_level_keyboard",
    "build_mode_keyboard",
]
