from __future__ import annotations

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from lexiquiz.bot.application import process_telegram_update
from lexiquiz.services.telegram_updates import extract_update_id

router = APIRouter(tags=["telegram"])
logger = structlog.get_logger(__name__)


def _ack() -> JSONResponse:
    # Telegram retries anything that is not a 2xx, so every outcome is acknowledged.
    return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ok"})


@router.post("/webhook/telegram")
async def telegram_webhook(request: Request) -> JSONResponse:
    try:
        update_payload = await request.json()
    except Exception:
        logger.warning("telegram_webhook_invalid_json")
        return _ack()

    update_id = extract_update_id(update_payload)
    if update_id is None:
        logger.warning("telegram_webhook_missing_update_id")
        return _ack()

    try:
        await process_telegram_update(update_payload=update_payload, update_id=update_id)
    except Exception as exc:
        logger.warning(
            "telegram_webhook_processing_failed",
            update_id=update_id,
            error_type=type(exc).__name__,
        )
    return _ack()
