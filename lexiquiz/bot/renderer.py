from __future__ import annotations

from typing import assert_never

import structlog
from aiogram import Bot

from lexiquiz.bot.keyboards import build_inline_keyboard
from lexiquiz.bot.views import render_view
from lexiquiz.game.actions import AnswerCallback, EditMessage, RenderAction, SendMessage, SetKeyboard

logger = structlog.get_logger(__name__)


class TelegramRenderer:
    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def render(self, action: RenderAction) -> int | None:
        try:
            return await self._render(action)
        except Exception as exc:
            logger.warning(
                "telegram_render_failed",
                action=type(action).__name__,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return None

    async def _render(self, action: RenderAction) -> int | None:
        if isinstance(action, SendMessage):
            text, keyboard = render_view(action.view)
            message = await self._bot.send_message(
                chat_id=action.chat_id,
                text=text,
                reply_markup=keyboard,
            )
            return message.message_id
        if isinstance(action, EditMessage):
            text, keyboard = render_view(action.view)
            await self._bot.edit_message_text(
                text=text,
                chat_id=action.chat_id,
                message_id=action.message_id,
                reply_markup=keyboard,
            )
            return action.message_id
        if isinstance(action, SetKeyboard):
            await self._bot.edit_message_reply_markup(
                chat_id=action.chat_id,
                message_id=action.message_id,
                reply_markup=build_inline_keyboard(action.keyboard),
            )
            return action.message_id
        if isinstance(action, AnswerCallback):
            await self._bot.answer_callback_query(
                callback_query_id=action.callback_id,
                text=action.text,
            )
            return None
        assert_never(action)
