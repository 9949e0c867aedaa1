from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from lexiquiz.game.actions import RenderAction
from lexiquiz.game.inbound import InboundUpdate
from lexiquiz.game.modes.catalog import DEFAULT_MODE, TrainingMode, describe_mode
from lexiquiz.game.variants import (
    ChoiceVariant,
    FactQuizVariant,
    FreeTextVariant,
    GameDependencies,
    GameVariant,
    TextTopicVariant,
)


@dataclass(frozen=True, slots=True)
class GameInvocation:
    variant: GameVariant[Any]
    payload: Any

    async def run(self) -> list[RenderAction]:
        return await self.variant.invoke(self.payload)


class GameRouter:
    def __init__(self, variants: Sequence[GameVariant[Any]]) -> None:
        if not variants:
            raise ValueError("at least one game variant is required")
        self._variants = tuple(variants)

    @classmethod
    def with_default_variants(cls, deps: GameDependencies) -> GameRouter:
        # Callback variants first; free text accepts any non-command text.
        return cls(
            [
                TextTopicVariant(deps),
                FactQuizVariant(deps),
                ChoiceVariant(deps),
                FreeTextVariant(deps),
            ]
        )

    @property
    def variants(self) -> tuple[GameVariant[Any], ...]:
        return self._variants

    def for_mode(self, mode: TrainingMode | str) -> GameVariant[Any]:
        kind = describe_mode(mode).variant
        for variant in self._variants:
            if variant.kind is kind:
                return variant
        for variant in self._variants:
            if variant.handles_mode(DEFAULT_MODE.value):
                return variant
        return self._variants[0]

    def for_update(self, update: InboundUpdate) -> GameInvocation | None:
        for variant in self._variants:
            payload = variant.build_input(update)
            if payload is not None:
                return GameInvocation(variant=variant, payload=payload)
        return None
