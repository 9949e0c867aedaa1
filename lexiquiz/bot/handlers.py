from __future__ import annotations

from aiogram import Bot, F, Router
from aiogram.types import CallbackQuery, Message

from lexiquiz.bot.orchestration import build_orchestrator
from lexiquiz.services.telegram_updates import inbound_from_callback, inbound_from_message

router = Router(name="quiz")


@router.message(F.text)
async def handle_text_message(message: Message, bot: Bot) -> None:
    await build_orchestrator(bot).handle_update(inbound_from_message(message))


@router.callback_query()
async def handle_callback(callback: CallbackQuery, bot: Bot) -> None:
    inbound = inbound_from_callback(callback)
    if inbound is None:
        await callback.answer()
        return
    await build_orchestrator(bot).handle_update(inbound)
