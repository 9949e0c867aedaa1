from __future__ import annotations

from aiogram import Bot

from lexiquiz.bot.renderer import TelegramRenderer
from lexiquiz.core.config import get_settings
from lexiquiz.core.metrics import StructlogMetricsSink
from lexiquiz.game.orchestrator import SessionOrchestrator
from lexiquiz.game.questions.fact_generator import build_fact_generator
from lexiquiz.game.questions.pool import build_pool_provider
from lexiquiz.game.questions.sampler import RandomQuestionSampler
from lexiquiz.game.router import GameRouter
from lexiquiz.game.sessions.store import RedisSessionStore, get_redis
from lexiquiz.game.variants import GameDependencies

_game_dependencies: GameDependencies | None = None


def build_game_dependencies() -> GameDependencies:
    global _game_dependencies
    if _game_dependencies is not None:
        return _game_dependencies

    settings = get_settings()
    _game_dependencies = GameDependencies(
        store=RedisSessionStore(get_redis(), key_prefix=settings.session_key_prefix),
        pool_provider=build_pool_provider(),
        sampler=RandomQuestionSampler(),
        metrics=StructlogMetricsSink(),
        fact_generator=build_fact_generator(),
        session_ttl_seconds=settings.session_ttl_seconds,
    )
    return _game_dependencies


def build_orchestrator(bot: Bot) -> SessionOrchestrator:
    deps = build_game_dependencies()
    return SessionOrchestrator(
        router=GameRouter.with_default_variants(deps),
        store=deps.store,
        renderer=TelegramRenderer(bot),
        metrics=deps.metrics,
    )
