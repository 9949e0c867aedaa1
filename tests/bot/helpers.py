from __future__ import annotations

from types import SimpleNamespace
from typing import Any


class DummyBot:
    def __init__(self, *, first_message_id: int = 500) -> None:
        self.raise_on_send_message = False
        self.sent_messages: list[dict[str, Any]] = []
        self.edited_texts: list[dict[str, Any]] = []
        self.edited_markups: list[dict[str, Any]] = []
        self.callback_answers: list[dict[str, Any]] = []
        self._next_message_id = first_message_id

    async def send_message(self, **kwargs: Any) -> SimpleNamespace:
        if self.raise_on_send_message:
            raise RuntimeError("send_message failed")
        self.sent_messages.append(kwargs)
        message_id = self._next_message_id
        self._next_message_id += 1
        return SimpleNamespace(message_id=message_id)

    async def edit_message_text(self, **kwargs: Any) -> bool:
        self.edited_texts.append(kwargs)
        return True

    async def edit_message_reply_markup(self, **kwargs: Any) -> bool:
        self.edited_markups.append(kwargs)
        return True

    async def answer_callback_query(self, **kwargs: Any) -> bool:
        self.callback_answers.append(kwargs)
        return True


def dummy_message(*, chat_id: int = 501, message_id: int = 7, text: str | None = "/start") -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(id=chat_id), message_id=message_id, text=text)


def dummy_callback(
    *,
    data: str | None,
    callback_id: str = "cb-1",
    message: SimpleNamespace | None = None,
) -> SimpleNamespace:
    return SimpleNamespace(id=callback_id, data=data, message=message)


class DummyCallback:
    def __init__(self, *, data: str | None, callback_id: str = "cb-1", message: SimpleNamespace | None = None) -> None:
        self.id = callback_id
        self.data = data
        self.message = message
        self.answer_calls = 0

    async def answer(self, *args: Any, **kwargs: Any) -> None:
        self.answer_calls += 1
