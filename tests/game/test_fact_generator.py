import asyncio
import json

import httpx
import pytest

from lexiquiz.game.questions.fact_generator import (
    ChatCompletionFactGenerator,
    FactGenerationError,
    build_user_prompt,
    parse_fact_payload,
)
from lexiquiz.game.questions.types import FactTopic

TOPIC = FactTopic(title="Ελληνικά νησιά", prompt="Write about {Crete}")
VALID_PAYLOAD = {
    "fact": "Η Κρήτη είναι το μεγαλύτερο ελληνικό νησί.",
    "question": "Ποιο είναι το μεγαλύτερο νησί;",
    "options": ["Ρόδος", "Κρήτη", "Νάξος", "Κως"],
    "correctIndex": 1,
}


def _generator(handler, **overrides) -> ChatCompletionFactGenerator:
    params = {
        "api_key": "test-key",
        "base_url": "https://ai.example.test/v1/",
        "model": "test-model",
        "timeout_ms": 5000,
        "transport": httpx.MockTransport(handler),
    }
    params.update(overrides)
    return ChatCompletionFactGenerator(**params)


def _completion(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def test_parse_accepts_fenced_json() -> None:
    content = "```json\n" + json.dumps(VALID_PAYLOAD, ensure_ascii=False) + "\n```"

    generated = parse_fact_payload(content)

    assert generated.options == ("Ρόδος", "Κρήτη", "Νάξος", "Κως")
    assert generated.correct_index == 1
    assert generated.fact.startswith("Η Κρήτη")


@pytest.mark.parametrize(
    "changes",
    [
        {"options": ["a", "b", "c"]},
        {"options": ["a", "b", "", "d"]},
        {"correctIndex": 4},
        {"fact": "   "},
        {"question": ""},
        {"fact": " ".join(["λέξη"] * 81)},
    ],
)
def test_parse_rejects_invalid_payloads(changes: dict) -> None:
    payload = {**VALID_PAYLOAD, **changes}

    with pytest.raises(FactGenerationError):
        parse_fact_payload(json.dumps(payload))


@pytest.mark.parametrize("content", ["", "no json here", "[1, 2, 3]", "{broken"])
def test_parse_rejects_non_object_content(content: str) -> None:
    with pytest.raises(FactGenerationError):
        parse_fact_payload(content)


def test_user_prompt_lists_recent_facts_and_expands_topic() -> None:
    prompt = build_user_prompt(level="b1", topic=TOPIC, recent_facts=["first", "second"])

    assert "Write about Crete" in prompt
    assert "first | second" in prompt
    assert "level B1" in prompt


@pytest.mark.asyncio
async def test_generate_posts_chat_completion_request() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return _completion(json.dumps(VALID_PAYLOAD))

    generated = await _generator(handler).generate(level="a1", topic=TOPIC, recent_facts=["older fact"])

    assert generated.correct_index == 1
    request = captured[0]
    assert str(request.url) == "https://ai.example.test/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    body = json.loads(request.content)
    assert body["model"] == "test-model"
    assert "older fact" in body["messages"][1]["content"]


@pytest.mark.asyncio
async def test_generate_without_configuration_fails() -> None:
    generator = _generator(lambda request: _completion("{}"), api_key="")

    with pytest.raises(FactGenerationError):
        await generator.generate(level="a1", topic=TOPIC, recent_facts=[])


@pytest.mark.asyncio
async def test_generate_maps_http_errors() -> None:
    generator = _generator(lambda request: httpx.Response(500, json={"error": "boom"}))

    with pytest.raises(FactGenerationError):
        await generator.generate(level="a1", topic=TOPIC, recent_facts=[])


@pytest.mark.asyncio
async def test_generate_maps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(FactGenerationError):
        await _generator(handler).generate(level="a1", topic=TOPIC, recent_facts=[])


@pytest.mark.asyncio
async def test_generate_times_out() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return _completion(json.dumps(VALID_PAYLOAD))

    with pytest.raises(FactGenerationError):
        await _generator(handler, timeout_ms=10).generate(level="a1", topic=TOPIC, recent_facts=[])
