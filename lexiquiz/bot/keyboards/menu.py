from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from lexiquiz.game.callback_data import (
    format_category_callback,
    format_level_callback,
    format_mode_callback,
)
from lexiquiz.game.modes.catalog import LEVELS, TrainingMode, WordCategory
from lexiquiz.game.modes.presentation import (
    display_category_label,
    display_level_label,
    display_mode_label,
)


def build_mode_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text=display_mode_label(mode.value),
                    callback_data=format_mode_callback(mode),
                )
            ]
            for mode in TrainingMode
        ]
    )


def build_category_keyboard(mode: TrainingMode) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text=display_category_label(category.value),
                    callback_data=format_category_callback(mode, category),
                )
            ]
            for category in WordCategory
        ]
    )


def build_level_keyboard(
    mode: TrainingMode, category: WordCategory | None = None
) -> InlineKeyboardMarkup:
    buttons = [
        InlineKeyboardButton(
            text=display_level_label(level),
            callback_data=format_level_callback(mode, level, category),
        )
        for level in LEVELS
    ]
    return InlineKeyboardMarkup(inline_keyboard=[buttons[:2], buttons[2:]])
