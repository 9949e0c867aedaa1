from __future__ import annotations

from typing import Sequence

from lexiquiz.game.actions import AnswerResultView, PromptKind, QuestionView, RenderAction
from lexiquiz.game.callback_data import CHOICE_PREFIX
from lexiquiz.game.modes.catalog import PromptDirection, TrainingMode, VariantKind, describe_mode
from lexiquiz.game.questions.types import PoolItem, Term
from lexiquiz.game.sessions.types import Session, SessionQuestion
from lexiquiz.game.variants.base import CallbackAnswerFlow, CallbackAnswerInput, PoolIndexedVariant


def _prompt_text(term: Term, direction: PromptDirection) -> str:
    return term.russian if direction is PromptDirection.REVERSE else term.greek


def _option_text(term: Term, direction: PromptDirection) -> str:
    return term.greek if direction is PromptDirection.REVERSE else term.russian


def _term(pool: Sequence[PoolItem], index: int) -> Term:
    item = pool[index]
    if not isinstance(item, Term):
        raise TypeError(f"expected a term at pool index {index}, got {type(item).__name__}")
    return item


class ChoiceVariant(CallbackAnswerFlow, PoolIndexedVariant[CallbackAnswerInput]):
    kind = VariantKind.CHOICE
    modes = frozenset({TrainingMode.GR_RU, TrainingMode.RU_GR})
    callback_prefix = CHOICE_PREFIX

    def _question_view(self, session: Session, pool: Sequence[PoolItem]) -> QuestionView:
        question = session.current
        if question is None:
            raise ValueError("session has no outstanding question")
        direction = describe_mode(session.mode).direction
        return QuestionView(
            session_id=session.id,
            number=session.question_number,
            total=session.total_count,
            prompt_kind=PromptKind.TRANSLATE,
            prompt=_prompt_text(_term(pool, question.answer_key_id), direction),
            options=tuple(_option_text(_term(pool, index), direction) for index in question.options),
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
        direction = describe_mode(session.mode).direction

        is_correct = payload.answer_index == question.correct_index
        selected = _term(pool, question.options[payload.answer_index])
        correct = _term(pool, question.answer_key_id)
        result = AnswerResultView(
            number=session.question_number,
            total=session.total_count,
            prompt_kind=PromptKind.TRANSLATE,
            prompt=_prompt_text(correct, direction),
            answer_text=_option_text(selected, direction),
            correct_text=_option_text(correct, direction),
            is_correct=is_correct,
        )
        await self._record_answer(session, is_correct=is_correct)

        actions = [self._result_action(payload.chat_id, payload.message_id, result)]
        actions.extend(await self._advance(payload.chat_id, session.scored(is_correct=is_correct), pool))
        return actions
