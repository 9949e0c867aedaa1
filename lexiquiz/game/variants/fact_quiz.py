from __future__ import annotations

from typing import Sequence

import structlog

from lexiquiz.core.metrics import METRIC_QUESTION_BUILD_FAILED
from lexiquiz.game.actions import (
    AnswerResultView,
    Notice,
    PromptKind,
    QuestionView,
    RenderAction,
    notice,
)
from lexiquiz.game.callback_data import FACT_PREFIX
from lexiquiz.game.modes.catalog import TrainingMode, VariantKind, WordCategory
from lexiquiz.game.questions.fact_generator import FactGenerationError
from lexiquiz.game.questions.types import FactTopic, PoolItem
from lexiquiz.game.sessions.types import Session, SessionQuestion
from lexiquiz.game.variants.base import CallbackAnswerFlow, CallbackAnswerInput, GameVariant

logger = structlog.get_logger(__name__)

FACT_OPTION_IDS = (0, 1, 2, 3)


def fact_question_text(question: SessionQuestion) -> str:
    fact = (question.prompt_text or "").strip()
    asked = (question.question_text or "").strip()
    if not fact or not asked:
        return ""
    return f"{fact}\n\n{asked}"


class FactQuizVariant(CallbackAnswerFlow, GameVariant[CallbackAnswerInput]):
    kind = VariantKind.FACT_QUIZ
    modes = frozenset({TrainingMode.FACT_QUIZ})
    callback_prefix = FACT_PREFIX

    async def _load_topics(self, level: str) -> Sequence[PoolItem]:
        return await self._deps.pool_provider.load(level=level, mode=TrainingMode.FACT_QUIZ.value)

    async def start(
        self,
        *,
        chat_id: int,
        mode: TrainingMode,
        level: str,
        category: WordCategory | None,
    ) -> list[RenderAction]:
        topics = await self._load_topics(level)
        if not topics:
            logger.info("question_pool_insufficient", mode=mode.value, level=level, pool_size=0)
            return [notice(chat_id, Notice.POOL_INSUFFICIENT)]

        session = await self._new_session(
            chat_id=chat_id,
            mode=TrainingMode.FACT_QUIZ,
            level=level,
            category=None,
            pool_size=len(topics),
        )
        try:
            prepared = await self._next_question(session, topics)
        except FactGenerationError:
            return [notice(chat_id, Notice.QUESTION_BUILD_FAILED)]
        if prepared is None:
            return await self._build_failed(chat_id, session)

        prepared = await self._started(prepared)
        return [self._question_action(prepared, self._question_view(prepared))]

    async def _answer(
        self,
        session: Session,
        question: SessionQuestion,
        payload: CallbackAnswerInput,
    ) -> list[RenderAction]:
        prompt = fact_question_text(question)
        option_texts = question.answer_option_texts or ()
        if not prompt or len(option_texts) != len(FACT_OPTION_IDS):
            return [notice(payload.chat_id, Notice.QUESTION_BUILD_FAILED)]
        self._ensure_option(option_texts, payload.answer_index)

        is_correct = payload.answer_index == question.correct_index
        result = AnswerResultView(
            number=session.question_number,
            total=session.total_count,
            prompt_kind=PromptKind.FACT,
            prompt=prompt,
            answer_text=option_texts[payload.answer_index],
            correct_text=option_texts[question.correct_index],
            is_correct=is_correct,
        )
        await self._record_answer(session, is_correct=is_correct)

        scored = session.scored(is_correct=is_correct)
        actions: list[RenderAction] = [self._result_action(payload.chat_id, payload.message_id, result)]
        topics = await self._load_topics(session.level)
        try:
            prepared = await self._next_question(scored, topics)
        except FactGenerationError:
            actions.append(notice(payload.chat_id, Notice.QUESTION_BUILD_FAILED))
            actions.extend(await self._finish(payload.chat_id, scored))
            return actions
        if prepared is None:
            actions.extend(await self._finish(payload.chat_id, scored))
            return actions

        prepared = await self._deps.store.put(prepared)
        actions.append(self._question_action(prepared, self._question_view(prepared)))
        return actions

    def _question_view(self, session: Session) -> QuestionView:
        question = session.current
        if question is None:
            raise ValueError("session has no outstanding question")
        return QuestionView(
            session_id=session.id,
            number=session.question_number,
            total=session.total_count,
            prompt_kind=PromptKind.FACT,
            prompt=fact_question_text(question),
            options=question.answer_option_texts or (),
            callback_prefix=self.callback_prefix,
        )

    async def _next_question(self, session: Session, topics: Sequence[PoolItem]) -> Session | None:
        drawn = self._deps.sampler.draw(session.remaining_ids)
        if drawn is None:
            return None
        topic_id, remaining = drawn

        try:
            topic = topics[topic_id] if topic_id < len(topics) else None
            if not isinstance(topic, FactTopic):
                raise FactGenerationError(f"fact topic {topic_id} is missing")
            generator = self._deps.fact_generator
            if generator is None:
                raise FactGenerationError("fact generator is not configured")
            generated = await generator.generate(
                level=session.level,
                topic=topic,
                recent_facts=session.recent_facts,
            )
        except FactGenerationError as exc:
            logger.warning(
                "fact_question_build_failed",
                session_id=session.id,
                level=session.level,
                error=str(exc),
            )
            await self._metric(METRIC_QUESTION_BUILD_FAILED, session)
            raise

        question = SessionQuestion(
            answer_key_id=topic_id,
            options=FACT_OPTION_IDS,
            correct_index=generated.correct_index,
            prompt_text=generated.fact,
            question_text=generated.question,
            answer_option_texts=generated.options,
        )
        return session.with_question(question, remaining_ids=remaining).with_recent_fact(generated.fact)
