import asyncio

from lexiquiz.bot.application import build_bot, build_dispatcher
from lexiquiz.core.config import get_settings
from lexiquiz.core.logging import configure_logging
from lexiquiz.game.sessions.store import close_redis


async def main() -> None:
    configure_logging(get_settings().log_level)
    bot = build_bot()
    dp = build_dispatcher()
    try:
        await dp.start_polling(bot)
    finally:
        await close_redis()


if __name__ == "__main__":
    asyncio.run(main())
