from __future__ import annotations

import asyncio
import json
import random
import re
from typing import Any, Protocol, Sequence

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lexiquiz.core.config import get_settings
from lexiquiz.game.questions.prompt_variation import expand_prompt_variations
from lexiquiz.game.questions.types import FactTopic, GeneratedFact
from lexiquiz.game.sessions.errors import GameSessionError

logger = structlog.get_logger(__name__)

MAX_FACT_WORDS = 80
CODE_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

SYSTEM_PROMPT = (
    "You write short facts in Greek for language learners. "
    "Reply with strict JSON only."
)


class FactGenerationError(GameSessionError):
    pass


class FactGenerator(Protocol):
    async def generate(
        self,
        *,
        level: str,
        topic: FactTopic,
        recent_facts: Sequence[str],
    ) -> GeneratedFact: ...


class _FactPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    fact: str
    question: str
    options: list[str]
    correct_index: int = Field(alias="correctIndex", ge=0, le=3)

    @field_validator("fact", "question", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("options", mode="before")
    @classmethod
    def _strip_options(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            raise ValueError("options must be a list")
        return [str(item).strip() for item in value]

    @field_validator("fact")
    @classmethod
    def _check_fact(cls, value: str) -> str:
        if not value:
            raise ValueError("fact is empty")
        if len(value.split()) > MAX_FACT_WORDS:
            raise ValueError(f"fact exceeds {MAX_FACT_WORDS} words")
        return value

    @field_validator("question")
    @classmethod
    def _check_question(cls, value: str) -> str:
        if not value:
            raise ValueError("question is empty")
        return value

    @field_validator("options")
    @classmethod
    def _check_options(cls, value: list[str]) -> list[str]:
        if len(value) != 4:
            raise ValueError("exactly 4 options are required")
        if any(not item for item in value):
            raise ValueError("options must be non-empty")
        return value


def parse_fact_payload(content: str) -> GeneratedFact:
    cleaned = CODE_FENCE_RE.sub("", content).strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start < 0 or end < start:
        raise FactGenerationError("AI response is not JSON")
    try:
        raw = json.loads(cleaned[start : end + 1])
    except json.JSONDecodeError as exc:
        raise FactGenerationError("AI response is not valid JSON") from exc
    if not isinstance(raw, dict):
        raise FactGenerationError("AI response is not a JSON object")
    try:
        payload = _FactPayload.model_validate(raw)
    except ValidationError as exc:
        raise FactGenerationError(f"AI response has invalid structure: {exc.error_count()} errors") from exc
    return GeneratedFact(
        fact=payload.fact,
        question=payload.question,
        options=(payload.options[0], payload.options[1], payload.options[2], payload.options[3]),
        correct_index=payload.correct_index,
    )


def build_user_prompt(
    *,
    level: str,
    topic: FactTopic,
    recent_facts: Sequence[str],
    rng: random.Random | None = None,
) -> str:
    if recent_facts:
        recent = "Do not repeat any of these recent facts: " + " | ".join(recent_facts)
    else:
        recent = "Do not repeat recent facts."
    return "\n".join(
        [
            f"Write a fact in Greek of at most {MAX_FACT_WORDS} words.",
            "Then ask one question about the text.",
            "Give 4 answer options, exactly one of them correct.",
            "Avoid reusing words from the fact in the options.",
            "Use Greek only, without Russian or English.",
            f"Use vocabulary of level {level.upper()}.",
            "Topic:",
            topic.title,
            "Topic instructions:",
            expand_prompt_variations(topic.prompt, rng),
            recent,
            "Answer format (strict JSON):",
            '{"fact": "fact text without the question", "question": "question", '
            '"options": ["A", "B", "C", "D"], "correctIndex": 0}',
        ]
    )


class ChatCompletionFactGenerator:
    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        model: str,
        timeout_ms: int,
        temperature: float = 0.7,
        rng: random.Random | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout_seconds = max(1, int(timeout_ms)) / 1000.0
        self._temperature = temperature
        self._rng = rng
        self._transport = transport

    async def generate(
        self,
        *,
        level: str,
        topic: FactTopic,
        recent_facts: Sequence[str],
    ) -> GeneratedFact:
        if not self._api_key or not self._base_url or not self._model:
            raise FactGenerationError("AI API is not configured")

        payload = {
            "model": self._model,
            "temperature": self._temperature,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": build_user_prompt(
                        level=level,
                        topic=topic,
                        recent_facts=recent_facts,
                        rng=self._rng,
                    ),
                },
            ],
        }
        try:
            content = await asyncio.wait_for(
                self._request_completion(payload),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise FactGenerationError("AI request timed out") from exc
        except httpx.HTTPError as exc:
            raise FactGenerationError(f"AI request failed: {type(exc).__name__}") from exc
        return parse_fact_payload(content)

    async def _request_completion(self, payload: dict[str, Any]) -> str:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                f"{self._base_url}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        if response.status_code != 200:
            logger.warning(
                "fact_generation_http_error",
                status_code=response.status_code,
            )
            raise FactGenerationError(f"AI error {response.status_code}")
        try:
            body = response.json()
            content = body["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise FactGenerationError("AI response has no content") from exc
        if not isinstance(content, str) or not content.strip():
            raise FactGenerationError("AI response is empty")
        return content.strip()


def build_fact_generator() -> ChatCompletionFactGenerator:
    settings = get_settings()
    return ChatCompletionFactGenerator(
        api_key=settings.ai_api_key,
        base_url=settings.ai_api_base_url,
        model=settings.ai_model,
        timeout_ms=settings.ai_timeout_ms,
        temperature=settings.ai_temperature,
    )
