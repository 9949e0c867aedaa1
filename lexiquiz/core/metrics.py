from __future__ import annotations

from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)

METRIC_SESSION_STARTED = "session_started"
METRIC_QUESTION_ANSWERED = "question_answered"
METRIC_QUESTION_ANSWERED_CORRECT = "question_answered_correct"
METRIC_QUESTION_ANSWERED_WRONG = "question_answered_wrong"
METRIC_SESSION_FINISHED = "session_finished"
METRIC_QUESTION_BUILD_FAILED = "question_build_failed"
METRIC_INVALID_ANSWER = "invalid_answer"
METRIC_UPDATE_FAILED = "update_failed"


class MetricsSink(Protocol):
    async def increment(self, name: str, *, dimensions: dict[str, str]) -> None: ...


class StructlogMetricsSink:
    async def increment(self, name: str, *, dimensions: dict[str, str]) -> None:
        logger.info("metric", metric=name, value=1, **dimensions)


async def safe_increment(
    sink: MetricsSink,
    name: str,
    **dimensions: str | None,
) -> None:
    clean = {key: str(value) for key, value in dimensions.items() if value is not None}
    try:
        await sink.increment(name, dimensions=clean)
    except Exception as exc:
        logger.warning(
            "metric_emit_failed",
            metric=name,
            error_type=type(exc).__name__,
        )
