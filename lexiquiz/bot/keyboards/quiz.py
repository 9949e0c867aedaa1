from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from lexiquiz.game.actions import Keyboard
from lexiquiz.game.callback_data import format_answer_callback

OPTIONS_PER_ROW = 2


def build_answer_keyboard(
    *, prefix: str, session_id: str, options: tuple[str, ...]
) -> InlineKeyboardMarkup:
    buttons = [
        InlineKeyboardButton(
            text=text,
            callback_data=format_answer_callback(prefix, session_id, index),
        )
        for index, text in enumerate(options)
    ]
    return InlineKeyboardMarkup(
        inline_keyboard=[
            buttons[start : start + OPTIONS_PER_ROW]
            for start in range(0, len(buttons), OPTIONS_PER_ROW)
        ]
    )


def build_inline_keyboard(keyboard: Keyboard) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text=button.text, callback_data=button.callback_data)
                for button in row
            ]
            for row in keyboard
        ]
    )
