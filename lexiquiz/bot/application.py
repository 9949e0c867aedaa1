from __future__ import annotations

import structlog
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import Update

from lexiquiz.bot.handlers import router as quiz_router
from lexiquiz.core.config import get_settings

logger = structlog.get_logger(__name__)

_dispatcher: Dispatcher | None = None


def build_bot() -> Bot:
    settings = get_settings()
    return Bot(token=settings.telegram_bot_token, default=DefaultBotProperties())


def build_dispatcher() -> Dispatcher:
    global _dispatcher
    if _dispatcher is not None:
        return _dispatcher

    dispatcher = Dispatcher()
    dispatcher.include_router(quiz_router)
    _dispatcher = dispatcher
    return dispatcher


async def process_telegram_update(*, update_payload: dict[str, object], update_id: int) -> None:
    try:
        bot = build_bot()
    except Exception:
        logger.exception("telegram_bot_init_failed", update_id=update_id)
        return
    dispatcher = build_dispatcher()

    try:
        update = Update.model_validate(update_payload)
        await dispatcher.feed_update(bot, update)
    except Exception:
        logger.exception("telegram_update_processing_failed", update_id=update_id)
    finally:
        await bot.session.close()
