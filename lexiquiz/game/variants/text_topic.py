from __future__ import annotations

from typing import Sequence

from lexiquiz.game.actions import AnswerResultView, PromptKind, QuestionView, RenderAction
from lexiquiz.game.callback_data import TEXT_TOPIC_PREFIX
from lexiquiz.game.modes.catalog import TrainingMode, VariantKind
from lexiquiz.game.questions.types import PoolItem, TextTopic
from lexiquiz.game.sessions.types import Session, SessionQuestion
from lexiquiz.game.variants.base import CallbackAnswerFlow, CallbackAnswerInput, PoolIndexedVariant


def _passage(pool: Sequence[PoolItem], index: int) -> TextTopic:
    item = pool[index]
    if not isinstance(item, TextTopic):
        raise TypeError(f"expected a text topic at pool index {index}, got {type(item).__name__}")
    return item


class TextTopicVariant(CallbackAnswerFlow, PoolIndexedVariant[CallbackAnswerInput]):
    kind = VariantKind.TEXT_TOPIC
    modes = frozenset({TrainingMode.TEXT_TOPIC})
    callback_prefix = TEXT_TOPIC_PREFIX

    def _question_view(self, session: Session, pool: Sequence[PoolItem]) -> QuestionView:
        question = session.current
        if question is None:
            raise ValueError("session has no outstanding question")
        return QuestionView(
            session_id=session.id,
            number=session.question_number,
            total=session.total_count,
            prompt_kind=PromptKind.TEXT_TOPIC,
            prompt=_passage(pool, question.answer_key_id).text,
            options=tuple(_passage(pool, index).topic for index in question.options),
            callback_prefix=self.callback_prefix,
        )

    async def _answer(
        self,
        session: Session,
        question: SessionQuestion,
        payload: CallbackAnswerInput,
    ) -> list[RenderAction]:
        self._ensure_option(question.options, payload.answer_index)
        pool = await self._session_pool(session)

        is_correct = payload.answer_index == question.correct_index
        passage = _passage(pool, question.answer_key_id)
        result = AnswerResultView(
            number=session.question_number,
            total=session.total_count,
            prompt_kind=PromptKind.TEXT_TOPIC,
            prompt=passage.text,
            answer_text=_passage(pool, question.options[payload.answer_index]).topic,
            correct_text=passage.topic,
            is_correct=is_correct,
        )
        await self._record_answer(session, is_correct=is_correct)

        actions = [self._result_action(payload.chat_id, payload.message_id, result)]
        actions.extend(await self._advance(payload.chat_id, session.scored(is_correct=is_correct), pool))
        return actions
