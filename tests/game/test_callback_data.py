import pytest

from lexiquiz.game.callback_data import (
    AnswerCallbackData,
    CategorySelection,
    LevelSelection,
    ModeSelection,
    format_answer_callback,
    format_category_callback,
    format_level_callback,
    format_mode_callback,
    parse_answer_callback,
    parse_callback_data,
    parse_menu_callback,
)
from lexiquiz.game.modes import TrainingMode, WordCategory


def test_parse_menu_callbacks() -> None:
    assert parse_menu_callback("mode:ru-gr") == ModeSelection(mode=TrainingMode.RU_GR)
    assert parse_menu_callback("category:nouns|mode:gr-ru") == CategorySelection(
        mode=TrainingMode.GR_RU,
        category=WordCategory.NOUNS,
    )
    assert parse_menu_callback("level:B1|mode:write") == LevelSelection(mode=TrainingMode.WRITE, level="b1")
    assert parse_menu_callback("level:a2|mode:gr-ru|category:adverbs") == LevelSelection(
        mode=TrainingMode.GR_RU,
        level="a2",
        category=WordCategory.ADVERBS,
    )


def test_unknown_values_fall_back_or_reject() -> None:
    assert parse_menu_callback("mode:klingon") == ModeSelection(mode=TrainingMode.GR_RU)
    assert parse_menu_callback("category:pronouns|mode:gr-ru") == CategorySelection(
        mode=TrainingMode.GR_RU,
        category=WordCategory.VERBS,
    )
    assert parse_menu_callback("level:c2|mode:gr-ru") is None


@pytest.mark.parametrize("data", [None, "", "mode", "level:|mode:gr-ru", "s=abc&a=1"])
def test_non_menu_data_is_not_a_menu_intent(data: str | None) -> None:
    assert parse_menu_callback(data) is None


def test_parse_answer_callback_respects_prefix() -> None:
    assert parse_answer_callback("f=ab12&a=3") == AnswerCallbackData(prefix="f", session_id="ab12", answer_index=3)
    assert parse_answer_callback("f=ab12&a=3", prefix="s") is None
    assert parse_answer_callback("x=ab12&a=3") is None
    assert parse_answer_callback("s=ab12&a=-1") is None


def test_parse_is_pure() -> None:
    data = "level:a1|mode:gr-ru|category:verbs"

    assert parse_callback_data(data) == parse_callback_data(data)


def test_formatted_callbacks_parse_back() -> None:
    assert parse_callback_data(format_mode_callback(TrainingMode.FACT_QUIZ)) == ModeSelection(
        mode=TrainingMode.FACT_QUIZ
    )
    assert parse_callback_data(
        format_category_callback(TrainingMode.RU_GR, WordCategory.ADJECTIVES)
    ) == CategorySelection(mode=TrainingMode.RU_GR, category=WordCategory.ADJECTIVES)
    assert parse_callback_data(
        format_level_callback(TrainingMode.RU_GR, "b2", WordCategory.NOUNS)
    ) == LevelSelection(mode=TrainingMode.RU_GR, level="b2", category=WordCategory.NOUNS)
    assert parse_callback_data(format_answer_callback("t", "0f0f", 2)) == AnswerCallbackData(
        prefix="t",
        session_id="0f0f",
        answer_index=2,
    )


def test_answer_callback_fits_telegram_limit() -> None:
    assert len(format_answer_callback("s", "f" * 16, 3).encode()) <= 64
