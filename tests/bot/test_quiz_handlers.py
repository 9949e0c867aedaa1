import pytest

from lexiquiz.bot import handlers
from lexiquiz.bot.renderer import TelegramRenderer
from lexiquiz.game.orchestrator import SessionOrchestrator
from lexiquiz.game.router import GameRouter
from tests.bot.helpers import DummyBot, DummyCallback, dummy_message
from tests.game.quiz_fakes import build_harness


def _patch_orchestrator(monkeypatch: pytest.MonkeyPatch):
    harness = build_harness()

    def _build(bot) -> SessionOrchestrator:
        return SessionOrchestrator(
            router=GameRouter.with_default_variants(harness.deps),
            store=harness.store,
            renderer=TelegramRenderer(bot),
            metrics=harness.metrics,
        )

    monkeypatch.setattr(handlers, "build_orchestrator", _build)
    return harness


@pytest.mark.asyncio
async def test_start_message_sends_mode_menu(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_orchestrator(monkeypatch)
    bot = DummyBot()

    await handlers.handle_text_message(dummy_message(text="/start"), bot)

    assert len(bot.sent_messages) == 1
    assert bot.sent_messages[0]["text"] == "Choose a training mode:"


@pytest.mark.asyncio
async def test_level_callback_tracks_delivered_question(monkeypatch: pytest.MonkeyPatch) -> None:
    harness = _patch_orchestrator(monkeypatch)
    bot = DummyBot(first_message_id=700)
    callback = DummyCallback(
        data="level:a1|mode:gr-ru|category:verbs",
        message=dummy_message(chat_id=501, message_id=12, text=None),
    )

    await handlers.handle_callback(callback, bot)

    assert bot.callback_answers[0]["callback_query_id"] == "cb-1"
    assert bot.edited_texts[0]["message_id"] == 12
    assert bot.sent_messages[0]["text"].startswith("Question 1/4")
    session = harness.latest_session(501)
    assert session.current is not None
    assert session.current.pending_message_id == 700


@pytest.mark.asyncio
async def test_callback_without_message_is_just_answered(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_orchestrator(monkeypatch)
    bot = DummyBot()
    callback = DummyCallback(data="mode:write")

    await handlers.handle_callback(callback, bot)

    assert callback.answer_calls == 1
    assert bot.callback_answers == []
