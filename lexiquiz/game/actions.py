from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Notice(str, Enum):
    SESSION_NOT_FOUND = "msg.session.not_found"
    QUESTION_INACTIVE = "msg.session.question_inactive"
    NO_ACTIVE_SESSION = "msg.session.no_active"
    POOL_INSUFFICIENT = "msg.pool.insufficient"
    QUESTION_BUILD_FAILED = "msg.question.build_failed"
    UNSUPPORTED_COMMAND = "msg.command.unsupported"
    EMPTY_ANSWER = "msg.answer.empty"
    INVALID_ANSWER = "msg.answer.invalid"


class PromptKind(str, Enum):
    TRANSLATE = "translate"
    TEXT_TOPIC = "text_topic"
    FACT = "fact"


@dataclass(frozen=True, slots=True)
class KeyboardButton:
    text: str
    callback_data: str


Keyboard = tuple[tuple[KeyboardButton, ...], ...]


@dataclass(frozen=True, slots=True)
class StartMenuView:
    pass


@dataclass(frozen=True, slots=True)
class CategoryPromptView:
    mode: str


@dataclass(frozen=True, slots=True)
class LevelPromptView:
    mode: str
    category: str | None = None


@dataclass(frozen=True, slots=True)
class LevelConfirmedView:
    mode: str
    level: str
    category: str | None = None


@dataclass(frozen=True, slots=True)
class QuestionView:
    session_id: str
    number: int
    total: int
    prompt_kind: PromptKind
    prompt: str
    options: tuple[str, ...] = ()
    # None for free-text questions, which carry no answer keyboard.
    callback_prefix: str | None = None


@dataclass(frozen=True, slots=True)
class AnswerResultView:
    number: int
    total: int
    prompt_kind: PromptKind
    prompt: str
    answer_text: str
    correct_text: str
    is_correct: bool


@dataclass(frozen=True, slots=True)
class SessionSummaryView:
    correct_count: int
    total_asked: int


@dataclass(frozen=True, slots=True)
class NoticeView:
    notice: Notice


MessageView = Union[
    StartMenuView,
    CategoryPromptView,
    LevelPromptView,
    LevelConfirmedView,
    QuestionView,
    AnswerResultView,
    SessionSummaryView,
    NoticeView,
]


@dataclass(frozen=True, slots=True)
class SendMessage:
    chat_id: int
    view: MessageView
    # Delivered message id is written back as the session's pending message.
    track_session_id: str | None = None


@dataclass(frozen=True, slots=True)
class EditMessage:
    chat_id: int
    message_id: int
    view: MessageView


@dataclass(frozen=True, slots=True)
class SetKeyboard:
    chat_id: int
    message_id: int
    keyboard: Keyboard = ()


@dataclass(frozen=True, slots=True)
class AnswerCallback:
    callback_id: str
    text: str | None = None


RenderAction = Union[SendMessage, EditMessage, SetKeyboard, AnswerCallback]


def notice(chat_id: int, kind: Notice) -> SendMessage:
    return SendMessage(chat_id=chat_id, view=NoticeView(notice=kind))
