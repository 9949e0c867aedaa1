import json
import logging

import structlog

from lexiquiz.core.logging import configure_logging


def test_structlog_and_library_records_share_json_format(capsys) -> None:
    root_logger = logging.getLogger()
    saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
    try:
        configure_logging("info")
        structlog.get_logger("lexiquiz.tests").info("game_session_started", session_id="abc", mode="gr-ru")
        logging.getLogger("uvicorn.error").info("Application startup complete.")
        logging.getLogger("aiogram.event").info("Update id=1 is handled.")
    finally:
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)

    records = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]

    assert [record["event"] for record in records] == [
        "game_session_started",
        "Application startup complete.",
    ]
    assert records[0]["session_id"] == "abc"
    assert records[0]["logger"] == "lexiquiz.tests"
    assert records[1]["logger"] == "uvicorn.error"
    assert all(record["level"] == "info" and "timestamp" in record for record in records)
