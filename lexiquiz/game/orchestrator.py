from __future__ import annotations

from typing import Protocol

import structlog

from lexiquiz.core.metrics import METRIC_UPDATE_FAILED, MetricsSink, safe_increment
from lexiquiz.game.actions import RenderAction, SendMessage
from lexiquiz.game.callback_data import (
    AnswerCallbackData,
    CategorySelection,
    LevelSelection,
    ModeSelection,
    parse_callback_data,
)
from lexiquiz.game.inbound import InboundUpdate
from lexiquiz.game.menu import MenuService
from lexiquiz.game.router import GameRouter
from lexiquiz.game.sessions.store import SessionStore

logger = structlog.get_logger(__name__)


class ActionRenderer(Protocol):
    async def render(self, action: RenderAction) -> int | None: ...


class SessionOrchestrator:
    def __init__(
        self,
        *,
        router: GameRouter,
        store: SessionStore,
        renderer: ActionRenderer,
        metrics: MetricsSink,
    ) -> None:
        self._router = router
        self._store = store
        self._renderer = renderer
        self._metrics = metrics

    async def dispatch(self, update: InboundUpdate) -> list[RenderAction]:
        if update.is_restart_command:
            return await self._restart(update.chat_id)
        if update.is_callback:
            return await self._dispatch_callback(update)
        if update.is_command:
            return MenuService.unsupported_command(update.chat_id)

        invocation = self._router.for_update(update)
        if invocation is None:
            return []
        return await invocation.run()

    async def _restart(self, chat_id: int) -> list[RenderAction]:
        latest = await self._store.get_latest_by_owner(chat_id)
        if latest is not None:
            await self._store.delete(latest.id)
            logger.info("game_session_superseded", session_id=latest.id)
        return MenuService.start(chat_id)

    async def _dispatch_callback(self, update: InboundUpdate) -> list[RenderAction]:
        callback_id = update.callback_id or ""
        intent = parse_callback_data(update.callback_data)

        if isinstance(intent, ModeSelection):
            return MenuService.mode_selected(
                chat_id=update.chat_id,
                message_id=update.message_id,
                callback_id=callback_id,
                mode=intent.mode,
            )
        if isinstance(intent, CategorySelection):
            return MenuService.category_selected(
                chat_id=update.chat_id,
                message_id=update.message_id,
                callback_id=callback_id,
                mode=intent.mode,
                category=intent.category,
            )
        if isinstance(intent, LevelSelection):
            actions = MenuService.level_selected(
                chat_id=update.chat_id,
                message_id=update.message_id,
                callback_id=callback_id,
                mode=intent.mode,
                level=intent.level,
                category=intent.category,
            )
            variant = self._router.for_mode(intent.mode)
            actions.extend(
                await variant.start(
                    chat_id=update.chat_id,
                    mode=intent.mode,
                    level=intent.level,
                    category=intent.category,
                )
            )
            return actions

        if isinstance(intent, AnswerCallbackData):
            invocation = self._router.for_update(update)
            if invocation is not None:
                return await invocation.run()
        return MenuService.unknown_callback(callback_id)

    async def handle_update(self, update: InboundUpdate) -> None:
        with structlog.contextvars.bound_contextvars(chat_id=update.chat_id):
            try:
                actions = await self.dispatch(update)
            except Exception:
                logger.exception("update_processing_failed", stage="dispatch")
                await safe_increment(self._metrics, METRIC_UPDATE_FAILED, stage="dispatch")
                return

            for action in actions:
                message_id = await self._renderer.render(action)
                if isinstance(action, SendMessage) and action.track_session_id and message_id is not None:
                    await self._track_pending_message(action.track_session_id, message_id)

    async def _track_pending_message(self, session_id: str, message_id: int) -> None:
        try:
            session = await self._store.get(session_id)
            if session is None or session.current is None:
                return
            await self._store.put(session.with_pending_message(message_id))
        except Exception:
            logger.exception("update_processing_failed", stage="track", session_id=session_id)
            await safe_increment(self._metrics, METRIC_UPDATE_FAILED, stage="track")
