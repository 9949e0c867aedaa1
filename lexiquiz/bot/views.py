from __future__ import annotations

from typing import assert_never

from aiogram.types import InlineKeyboardMarkup

from lexiquiz.bot.keyboards import (
    build_answer_keyboard,
    build_category_keyboard,
    build_level_keyboard,
    build_mode_keyboard,
)
from lexiquiz.bot.texts.en import TEXTS_EN
from lexiquiz.game.actions import (
    AnswerResultView,
    CategoryPromptView,
    LevelConfirmedView,
    LevelPromptView,
    MessageView,
    NoticeView,
    PromptKind,
    QuestionView,
    SessionSummaryView,
    StartMenuView,
)
from lexiquiz.game.modes.catalog import parse_category, parse_mode
from lexiquiz.game.modes.presentation import (
    display_category_label,
    display_level_label,
    display_mode_label,
)

RenderedView = tuple[str, InlineKeyboardMarkup | None]


def _question_text(view: QuestionView) -> str:
    header = TEXTS_EN["msg.question.header"].format(number=view.number, total=view.total)
    if view.prompt_kind is PromptKind.TRANSLATE:
        return "\n".join([header, TEXTS_EN["msg.question.translate"].format(prompt=view.prompt)])
    if view.prompt_kind is PromptKind.TEXT_TOPIC:
        return "\n".join([header, TEXTS_EN["msg.question.text_topic"], view.prompt])
    return "\n".join([header, view.prompt])


def _result_text(view: AnswerResultView) -> str:
    lines = [TEXTS_EN["msg.question.header"].format(number=view.number, total=view.total)]
    correct_key = "msg.result.correct_answer"
    if view.prompt_kind is PromptKind.TRANSLATE:
        lines.append(TEXTS_EN["msg.question.translate"].format(prompt=view.prompt))
    elif view.prompt_kind is PromptKind.TEXT_TOPIC:
        lines.extend([TEXTS_EN["msg.result.text"], view.prompt])
        correct_key = "msg.result.correct_topic"
    else:
        lines.extend([TEXTS_EN["msg.result.fact"], view.prompt])
    lines.append(TEXTS_EN["msg.result.your_answer"].format(answer=view.answer_text))
    lines.append(TEXTS_EN[correct_key].format(correct=view.correct_text))
    lines.append(TEXTS_EN["msg.result.correct" if view.is_correct else "msg.result.wrong"])
    return "\n".join(lines)


def render_view(view: MessageView) -> RenderedView:
    if isinstance(view, StartMenuView):
        return TEXTS_EN["msg.menu.choose_mode"], build_mode_keyboard()
    if isinstance(view, CategoryPromptView):
        mode = parse_mode(view.mode)
        text = TEXTS_EN["msg.menu.mode_selected.category"].format(mode=display_mode_label(mode.value))
        return text, build_category_keyboard(mode)
    if isinstance(view, LevelPromptView):
        mode = parse_mode(view.mode)
        category = parse_category(view.category)
        if category is None:
            text = TEXTS_EN["msg.menu.mode_selected.level"].format(mode=display_mode_label(mode.value))
        else:
            text = TEXTS_EN["msg.menu.category_selected"].format(
                category=display_category_label(category.value)
            )
        return text, build_level_keyboard(mode, category)
    if isinstance(view, LevelConfirmedView):
        category_prefix = f"{display_category_label(view.category)}, " if view.category else ""
        text = TEXTS_EN["msg.menu.level_selected"].format(
            category_prefix=category_prefix,
            mode=display_mode_label(view.mode),
            level=display_level_label(view.level),
        )
        return text, None
    if isinstance(view, QuestionView):
        keyboard = None
        if view.callback_prefix is not None and view.options:
            keyboard = build_answer_keyboard(
                prefix=view.callback_prefix,
                session_id=view.session_id,
                options=view.options,
            )
        return _question_text(view), keyboard
    if isinstance(view, AnswerResultView):
        return _result_text(view), None
    if isinstance(view, SessionSummaryView):
        text = TEXTS_EN["msg.session.summary"].format(
            correct=view.correct_count,
            total=view.total_asked,
        )
        return text, None
    if isinstance(view, NoticeView):
        return TEXTS_EN[view.notice.value], None
    assert_never(view)
