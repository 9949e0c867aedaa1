from lexiquiz.bot.keyboards import (
    build_answer_keyboard,
    build_inline_keyboard,
    build_level_keyboard,
    build_mode_keyboard,
)
from lexiquiz.game.actions import KeyboardButton
from lexiquiz.game.modes import TrainingMode


def _callback_data(keyboard) -> list[str]:
    return [button.callback_data for row in keyboard.inline_keyboard for button in row]


def test_mode_keyboard_lists_every_mode() -> None:
    keyboard = build_mode_keyboard()

    assert _callback_data(keyboard) == [
        "mode:gr-ru",
        "mode:ru-gr",
        "mode:write",
        "mode:text-topic",
        "mode:fact-quiz",
    ]


def test_level_keyboard_without_category() -> None:
    keyboard = build_level_keyboard(TrainingMode.FACT_QUIZ)

    assert [len(row) for row in keyboard.inline_keyboard] == [2, 2]
    assert _callback_data(keyboard)[-1] == "level:b2|mode:fact-quiz"


def test_answer_keyboard_places_two_options_per_row() -> None:
    keyboard = build_answer_keyboard(prefix="f", session_id="abc", options=("a", "b", "c", "d"))

    assert [[button.text for button in row] for row in keyboard.inline_keyboard] == [["a", "b"], ["c", "d"]]
    assert _callback_data(keyboard) == ["f=abc&a=0", "f=abc&a=1", "f=abc&a=2", "f=abc&a=3"]


def test_inline_keyboard_from_plain_buttons() -> None:
    keyboard = build_inline_keyboard(((KeyboardButton(text="ok", callback_data="mode:write"),),))

    assert _callback_data(keyboard) == ["mode:write"]
    assert build_inline_keyboard(()).inline_keyboard == []
