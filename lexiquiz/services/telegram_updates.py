from __future__ import annotations

from aiogram.types import CallbackQuery, Message

from lexiquiz.game.inbound import InboundUpdate


def extract_update_id(update_payload: object) -> int | None:
    if not isinstance(update_payload, dict):
        return None

    update_id = update_payload.get("update_id")
    if isinstance(update_id, int):
        return update_id
    return None


def inbound_from_message(message: Message) -> InboundUpdate:
    return InboundUpdate.from_message(
        chat_id=message.chat.id,
        message_id=message.message_id,
        text=message.text,
    )


def inbound_from_callback(callback: CallbackQuery) -> InboundUpdate | None:
    message = callback.message
    if message is None:
        return None
    return InboundUpdate.from_callback(
        chat_id=message.chat.id,
        message_id=message.message_id,
        callback_id=callback.id,
        data=callback.data,
    )
