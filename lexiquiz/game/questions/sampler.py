from __future__ import annotations

import random
from dataclasses import dataclass
from typing import AbstractSet, Protocol

from lexiquiz.game.sessions.types import SessionQuestion

DISTRACTOR_COUNT = 3
MIN_POOL_SIZE = DISTRACTOR_COUNT + 1


@dataclass(frozen=True, slots=True)
class SampledQuestion:
    question: SessionQuestion
    remaining: frozenset[int]


class QuestionSampler(Protocol):
    def sample(self, pool_size: int, remaining_ids: AbstractSet[int]) -> SampledQuestion | None: ...

    def draw(self, remaining_ids: AbstractSet[int]) -> tuple[int, frozenset[int]] | None: ...


class RandomQuestionSampler:
    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def draw(self, remaining_ids: AbstractSet[int]) -> tuple[int, frozenset[int]] | None:
        if not remaining_ids:
            return None
        answer_key_id = self._rng.choice(sorted(remaining_ids))
        return answer_key_id, frozenset(remaining_ids) - {answer_key_id}

    def sample(self, pool_size: int, remaining_ids: AbstractSet[int]) -> SampledQuestion | None:
        drawn = self.draw(remaining_ids)
        if drawn is None:
            return None
        answer_key_id, remaining = drawn

        candidates = [index for index in range(pool_size) if index != answer_key_id]
        options = [answer_key_id, *self._rng.sample(candidates, DISTRACTOR_COUNT)]
        self._rng.shuffle(options)
        return SampledQuestion(
            question=SessionQuestion(
                answer_key_id=answer_key_id,
                options=tuple(options),
                correct_index=options.index(answer_key_id),
            ),
            remaining=remaining,
        )
