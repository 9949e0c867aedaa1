from __future__ import annotations

import unicodedata
from typing import Sequence

from lexiquiz.core.metrics import METRIC_INVALID_ANSWER
from lexiquiz.game.actions import AnswerResultView, Notice, PromptKind, QuestionView, RenderAction, notice
from lexiquiz.game.inbound import InboundUpdate
from lexiquiz.game.modes.catalog import TrainingMode, VariantKind
from lexiquiz.game.questions.types import PoolItem, Term
from lexiquiz.game.sessions.errors import SessionNotFoundError
from lexiquiz.game.sessions.types import Session
from lexiquiz.game.variants.base import PoolIndexedVariant, TextAnswerInput

# grave, acute, perispomeni, dialytika tonos, ypogegrammeni
GREEK_ACCENT_MARKS = frozenset("\u0300\u0301\u0342\u0344\u0345")


def normalize_answer(value: str) -> str:
    return unicodedata.normalize("NFC", value.strip().lower())


def has_greek_accent(value: str) -> bool:
    return any(char in GREEK_ACCENT_MARKS for char in unicodedata.normalize("NFD", value))


def strip_greek_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(char for char in decomposed if char not in GREEK_ACCENT_MARKS)
    return unicodedata.normalize("NFC", stripped)


def answer_matches(submitted: str, expected: str) -> bool:
    submitted = normalize_answer(submitted)
    expected = normalize_answer(expected)
    if not has_greek_accent(submitted):
        return strip_greek_accents(submitted) == strip_greek_accents(expected)
    return submitted == expected


def _term(pool: Sequence[PoolItem], index: int) -> Term:
    item = pool[index]
    if not isinstance(item, Term):
        raise TypeError(f"expected a term at pool index {index}, got {type(item).__name__}")
    return item


class FreeTextVariant(PoolIndexedVariant[TextAnswerInput]):
    kind = VariantKind.FREE_TEXT
    modes = frozenset({TrainingMode.WRITE})

    def build_input(self, update: InboundUpdate) -> TextAnswerInput | None:
        if update.is_callback or update.text is None or update.is_command:
            return None
        return TextAnswerInput(chat_id=update.chat_id, text=update.text)

    def _question_view(self, session: Session, pool: Sequence[PoolItem]) -> QuestionView:
        question = session.current
        if question is None:
            raise ValueError("session has no outstanding question")
        return QuestionView(
            session_id=session.id,
            number=session.question_number,
            total=session.total_count,
            prompt_kind=PromptKind.TRANSLATE,
            prompt=_term(pool, question.answer_key_id).russian,
        )

    async def invoke(self, payload: TextAnswerInput) -> list[RenderAction]:
        session = await self._deps.store.get_latest_by_owner(payload.chat_id)
        if session is None or session.current is None or not self.handles_mode(session.mode):
            await self._metric(
                METRIC_INVALID_ANSWER,
                reason="no_session",
                mode=TrainingMode.WRITE.value,
            )
            return [notice(payload.chat_id, Notice.NO_ACTIVE_SESSION)]
        question = session.current

        answer = normalize_answer(payload.text)
        if not answer:
            await self._metric(METRIC_INVALID_ANSWER, session, reason="empty")
            return [notice(payload.chat_id, Notice.EMPTY_ANSWER)]

        try:
            pool = await self._session_pool(session)
        except SessionNotFoundError:
            return [notice(payload.chat_id, Notice.SESSION_NOT_FOUND)]

        term = _term(pool, question.answer_key_id)
        is_correct = answer_matches(answer, term.greek)
        result = AnswerResultView(
            number=session.question_number,
            total=session.total_count,
            prompt_kind=PromptKind.TRANSLATE,
            prompt=term.russian,
            answer_text=answer,
            correct_text=term.greek,
            is_correct=is_correct,
        )
        await self._record_answer(session, is_correct=is_correct)

        actions = [self._result_action(payload.chat_id, question.pending_message_id, result)]
        actions.extend(await self._advance(payload.chat_id, session.scored(is_correct=is_correct), pool))
        return actions
