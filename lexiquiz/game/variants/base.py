from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

import structlog

from lexiquiz.core.metrics import (
    METRIC_INVALID_ANSWER,
    METRIC_QUESTION_ANSWERED,
    METRIC_QUESTION_ANSWERED_CORRECT,
    METRIC_QUESTION_ANSWERED_WRONG,
    METRIC_QUESTION_BUILD_FAILED,
    METRIC_SESSION_FINISHED,
    METRIC_SESSION_STARTED,
    MetricsSink,
    safe_increment,
)
from lexiquiz.game.actions import (
    AnswerCallback,
    AnswerResultView,
    EditMessage,
    Notice,
    QuestionView,
    RenderAction,
    SendMessage,
    SessionSummaryView,
    SetKeyboard,
    notice,
)
from lexiquiz.game.callback_data import parse_answer_callback
from lexiquiz.game.inbound import InboundUpdate
from lexiquiz.game.menu import MenuService
from lexiquiz.game.modes.catalog import (
    DEFAULT_CATEGORY,
    TrainingMode,
    VariantKind,
    WordCategory,
    describe_mode,
)
from lexiquiz.game.questions.fact_generator import FactGenerator
from lexiquiz.game.questions.pool import PoolProvider
from lexiquiz.game.questions.sampler import MIN_POOL_SIZE, QuestionSampler
from lexiquiz.game.questions.types import PoolItem
from lexiquiz.game.sessions.errors import (
    InvalidAnswerOptionError,
    PoolInsufficientError,
    SessionNotFoundError,
    StaleQuestionError,
)
from lexiquiz.game.sessions.store import SessionStore
from lexiquiz.game.sessions.types import Session, SessionQuestion

logger = structlog.get_logger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 86400


@dataclass(slots=True)
class GameDependencies:
    store: SessionStore
    pool_provider: PoolProvider
    sampler: QuestionSampler
    metrics: MetricsSink
    fact_generator: FactGenerator | None = None
    session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS
    clock: Callable[[], float] = time.time


@dataclass(frozen=True, slots=True)
class CallbackAnswerInput:
    chat_id: int
    message_id: int | None
    callback_id: str
    session_id: str
    answer_index: int


@dataclass(frozen=True, slots=True)
class TextAnswerInput:
    chat_id: int
    text: str


InputT = TypeVar("InputT", CallbackAnswerInput, TextAnswerInput)


class GameVariant(ABC, Generic[InputT]):
    kind: VariantKind
    modes: frozenset[TrainingMode]

    def __init__(self, deps: GameDependencies) -> None:
        self._deps = deps

    def handles_mode(self, mode: str) -> bool:
        return any(item.value == mode for item in self.modes)

    @abstractmethod
    def build_input(self, update: InboundUpdate) -> InputT | None: ...

    @abstractmethod
    async def invoke(self, payload: InputT) -> list[RenderAction]: ...

    @abstractmethod
    async def start(
        self,
        *,
        chat_id: int,
        mode: TrainingMode,
        level: str,
        category: WordCategory | None,
    ) -> list[RenderAction]: ...

    def _now_ts(self) -> int:
        return int(self._deps.clock())

    async def _metric(self, name: str, session: Session | None = None, **dimensions: str | None) -> None:
        if session is not None:
            dimensions.setdefault("mode", session.mode)
            dimensions.setdefault("level", session.level.upper())
        await safe_increment(self._deps.metrics, name, **dimensions)

    async def _record_answer(self, session: Session, *, is_correct: bool) -> None:
        await self._metric(
            METRIC_QUESTION_ANSWERED,
            session,
            result="correct" if is_correct else "wrong",
        )
        await self._metric(
            METRIC_QUESTION_ANSWERED_CORRECT if is_correct else METRIC_QUESTION_ANSWERED_WRONG,
            session,
        )

    async def _new_session(
        self,
        *,
        chat_id: int,
        mode: TrainingMode,
        level: str,
        category: WordCategory | None,
        pool_size: int,
    ) -> Session:
        previous = await self._deps.store.get_latest_by_owner(chat_id)
        if previous is not None:
            await self._deps.store.delete(previous.id)

        if describe_mode(mode).has_category_facet:
            category_value: str | None = (category or DEFAULT_CATEGORY).value
        else:
            category_value = None
        return Session.create(
            owner_id=chat_id,
            level=level,
            mode=mode.value,
            category=category_value,
            candidate_ids=range(pool_size),
            now_ts=self._now_ts(),
            ttl_seconds=self._deps.session_ttl_seconds,
        )

    async def _started(self, session: Session) -> Session:
        stored = await self._deps.store.put(session)
        await self._metric(METRIC_SESSION_STARTED, stored)
        logger.info(
            "game_session_started",
            session_id=stored.id,
            mode=stored.mode,
            level=stored.level,
            total_count=stored.total_count,
        )
        return stored

    async def _build_failed(self, chat_id: int, session: Session) -> list[RenderAction]:
        await self._metric(METRIC_QUESTION_BUILD_FAILED, session)
        return [notice(chat_id, Notice.QUESTION_BUILD_FAILED)]

    async def _finish(self, chat_id: int, session: Session) -> list[RenderAction]:
        stored = await self._deps.store.put(session)
        await self._metric(METRIC_SESSION_FINISHED, stored)
        logger.info(
            "game_session_finished",
            session_id=stored.id,
            correct_count=stored.correct_count,
            total_asked=stored.total_asked,
        )
        return [
            SendMessage(
                chat_id=chat_id,
                view=SessionSummaryView(
                    correct_count=stored.correct_count,
                    total_asked=stored.total_asked,
                ),
            ),
            *MenuService.start(chat_id),
        ]

    def _question_action(self, session: Session, view: QuestionView) -> SendMessage:
        return SendMessage(chat_id=session.owner_id, view=view, track_session_id=session.id)

    @staticmethod
    def _result_action(chat_id: int, message_id: int | None, view: AnswerResultView) -> RenderAction:
        if message_id is None:
            return SendMessage(chat_id=chat_id, view=view)
        return EditMessage(chat_id=chat_id, message_id=message_id, view=view)


class CallbackAnswerFlow:
    """Shared answer handling for variants answered through inline buttons.

    Every response starts with the callback acknowledgement. Missing sessions,
    sessions of another variant and taps on a superseded question message are
    answered with a notice and leave the stored session untouched.
    """

    callback_prefix: str
    _deps: GameDependencies
    handles_mode: Callable[[str], bool]
    _metric: Callable[..., Awaitable[None]]

    async def _answer(
        self,
        session: Session,
        question: SessionQuestion,
        payload: CallbackAnswerInput,
    ) -> list[RenderAction]:
        raise NotImplementedError

    def build_input(self, update: InboundUpdate) -> CallbackAnswerInput | None:
        if not update.is_callback or update.callback_id is None:
            return None
        parsed = parse_answer_callback(update.callback_data, prefix=self.callback_prefix)
        if parsed is None:
            return None
        return CallbackAnswerInput(
            chat_id=update.chat_id,
            message_id=update.message_id,
            callback_id=update.callback_id,
            session_id=parsed.session_id,
            answer_index=parsed.answer_index,
        )

    async def invoke(self, payload: CallbackAnswerInput) -> list[RenderAction]:
        actions: list[RenderAction] = [AnswerCallback(callback_id=payload.callback_id)]
        try:
            session, question = await self._load_active(payload.session_id)
            self._ensure_current_message(question, payload.message_id)
            actions.extend(await self._answer(session, question, payload))
        except SessionNotFoundError:
            logger.info("game_session_not_found", session_id=payload.session_id)
            actions.append(notice(payload.chat_id, Notice.SESSION_NOT_FOUND))
        except StaleQuestionError:
            logger.info(
                "game_question_stale",
                session_id=payload.session_id,
                message_id=payload.message_id,
            )
            if payload.message_id is not None:
                actions.append(SetKeyboard(chat_id=payload.chat_id, message_id=payload.message_id))
            actions.append(notice(payload.chat_id, Notice.QUESTION_INACTIVE))
        except InvalidAnswerOptionError:
            await self._metric(METRIC_INVALID_ANSWER, reason="out_of_range")
            actions.append(notice(payload.chat_id, Notice.INVALID_ANSWER))
        return actions

    async def _load_active(self, session_id: str) -> tuple[Session, SessionQuestion]:
        session = await self._deps.store.get(session_id)
        if session is None or session.current is None or not self.handles_mode(session.mode):
            raise SessionNotFoundError(session_id)
        return session, session.current

    @staticmethod
    def _ensure_current_message(question: SessionQuestion, message_id: int | None) -> None:
        if question.pending_message_id is not None and question.pending_message_id != message_id:
            raise StaleQuestionError(message_id)

    @staticmethod
    def _ensure_option(options: Sequence[object], answer_index: int) -> None:
        if not 0 <= answer_index < len(options):
            raise InvalidAnswerOptionError(answer_index)


class PoolIndexedVariant(GameVariant[InputT]):
    async def _load_pool(self, *, level: str, mode: str, category: str | None) -> Sequence[PoolItem]:
        return await self._deps.pool_provider.load(level=level, mode=mode, category=category)

    async def _require_pool(self, *, level: str, mode: str, category: str | None) -> Sequence[PoolItem]:
        pool = await self._load_pool(level=level, mode=mode, category=category)
        if len(pool) < MIN_POOL_SIZE:
            raise PoolInsufficientError(len(pool))
        return pool

    async def _session_pool(self, session: Session) -> Sequence[PoolItem]:
        pool = await self._load_pool(level=session.level, mode=session.mode, category=session.category)
        question = session.current
        referenced = question.options if question is not None else ()
        if any(index >= len(pool) for index in referenced):
            # The sheet shrank underneath a running session.
            raise SessionNotFoundError(session.id)
        return pool

    @abstractmethod
    def _question_view(self, session: Session, pool: Sequence[PoolItem]) -> QuestionView: ...

    async def start(
        self,
        *,
        chat_id: int,
        mode: TrainingMode,
        level: str,
        category: WordCategory | None,
    ) -> list[RenderAction]:
        try:
            pool = await self._require_pool(
                level=level,
                mode=mode.value,
                category=category.value if category is not None else None,
            )
        except PoolInsufficientError as exc:
            logger.info("question_pool_insufficient", mode=mode.value, level=level, pool_size=exc.args[0])
            return [notice(chat_id, Notice.POOL_INSUFFICIENT)]

        session = await self._new_session(
            chat_id=chat_id,
            mode=mode,
            level=level,
            category=category,
            pool_size=len(pool),
        )
        sampled = self._deps.sampler.sample(len(pool), session.remaining_ids)
        if sampled is None:
            return await self._build_failed(chat_id, session)

        session = session.with_question(sampled.question, remaining_ids=sampled.remaining)
        view = self._question_view(session, pool)
        session = await self._started(session)
        return [self._question_action(session, view)]

    async def _advance(self, chat_id: int, scored: Session, pool: Sequence[PoolItem]) -> list[RenderAction]:
        pool_size = len(pool)
        # Ids past the end of a sheet that shrank since the session started.
        remaining = frozenset(index for index in scored.remaining_ids if index < pool_size)
        sampled = None
        if pool_size >= MIN_POOL_SIZE:
            sampled = self._deps.sampler.sample(pool_size, remaining)
        if sampled is None:
            return await self._finish(chat_id, replace(scored, remaining_ids=frozenset()))

        session = scored.with_question(sampled.question, remaining_ids=sampled.remaining)
        view = self._question_view(session, pool)
        session = await self._deps.store.put(session)
        return [self._question_action(session, view)]
