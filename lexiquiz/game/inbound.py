from __future__ import annotations

from dataclasses import dataclass

RESTART_COMMANDS = frozenset({"/start", "/menu", "/end", "/stop"})


@dataclass(frozen=True, slots=True)
class InboundUpdate:
    chat_id: int
    message_id: int | None = None
    text: str | None = None
    callback_id: str | None = None
    callback_data: str | None = None

    @property
    def is_callback(self) -> bool:
        return self.callback_id is not None

    @property
    def is_restart_command(self) -> bool:
        if self.is_callback or self.text is None:
            return False
        parts = self.text.strip().lower().split()
        if not parts:
            return False
        return parts[0].split("@", 1)[0] in RESTART_COMMANDS

    @property
    def is_command(self) -> bool:
        return not self.is_callback and self.text is not None and self.text.strip().startswith("/")

    @classmethod
    def from_message(cls, *, chat_id: int, message_id: int | None, text: str | None) -> InboundUpdate:
        return cls(chat_id=chat_id, message_id=message_id, text=text)

    @classmethod
    def from_callback(
        cls,
        *,
        chat_id: int,
        message_id: int | None,
        callback_id: str,
        data: str | None,
    ) -> InboundUpdate:
        return cls(
            chat_id=chat_id,
            message_id=message_id,
            callback_id=callback_id,
            callback_data=data or "",
        )
