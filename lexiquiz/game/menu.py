from __future__ import annotations

from lexiquiz.game.actions import (
    AnswerCallback,
    CategoryPromptView,
    EditMessage,
    LevelConfirmedView,
    LevelPromptView,
    MessageView,
    Notice,
    RenderAction,
    SendMessage,
    StartMenuView,
    notice,
)
from lexiquiz.game.modes.catalog import TrainingMode, WordCategory, describe_mode


class MenuService:
    @staticmethod
    def _replace_or_send(chat_id: int, message_id: int | None, view: MessageView) -> RenderAction:
        if message_id is None:
            return SendMessage(chat_id=chat_id, view=view)
        return EditMessage(chat_id=chat_id, message_id=message_id, view=view)

    @staticmethod
    def start(chat_id: int) -> list[RenderAction]:
        return [SendMessage(chat_id=chat_id, view=StartMenuView())]

    @staticmethod
    def mode_selected(
        *,
        chat_id: int,
        message_id: int | None,
        callback_id: str,
        mode: TrainingMode,
    ) -> list[RenderAction]:
        view: MessageView
        if describe_mode(mode).has_category_facet:
            view = CategoryPromptView(mode=mode.value)
        else:
            view = LevelPromptView(mode=mode.value)
        return [
            AnswerCallback(callback_id=callback_id),
            MenuService._replace_or_send(chat_id, message_id, view),
        ]

    @staticmethod
    def category_selected(
        *,
        chat_id: int,
        message_id: int | None,
        callback_id: str,
        mode: TrainingMode,
        category: WordCategory,
    ) -> list[RenderAction]:
        return [
            AnswerCallback(callback_id=callback_id),
            MenuService._replace_or_send(
                chat_id,
                message_id,
                LevelPromptView(mode=mode.value, category=category.value),
            ),
        ]

    @staticmethod
    def level_selected(
        *,
        chat_id: int,
        message_id: int | None,
        callback_id: str,
        mode: TrainingMode,
        level: str,
        category: WordCategory | None = None,
    ) -> list[RenderAction]:
        view = LevelConfirmedView(
            mode=mode.value,
            level=level,
            category=category.value if category is not None else None,
        )
        return [
            AnswerCallback(callback_id=callback_id),
            MenuService._replace_or_send(chat_id, message_id, view),
        ]

    @staticmethod
    def unsupported_command(chat_id: int) -> list[RenderAction]:
        return [notice(chat_id, Notice.UNSUPPORTED_COMMAND)]

    @staticmethod
    def unknown_callback(callback_id: str) -> list[RenderAction]:
        return [AnswerCallback(callback_id=callback_id)]
