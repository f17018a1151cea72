"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging

from rich.logging import RichHandler

from cinemarathon.shared.errors import ErrorCode, create_source_error
from cinemarathon.shared.logging import (
    StructuredFormatter,
    log_operation_error,
    log_operation_success,
    setup_structured_logger,
)


def test_structured_formatter_renders_json():
    record = logging.LogRecord("cinemarathon.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
    record.operation = "fetch_detail"

    entry = json.loads(StructuredFormatter().format(record))

    assert entry["message"] == "hello world"
    assert entry["level"] == "WARNING"
    assert entry["operation"] == "fetch_detail"


def test_setup_structured_logger_with_file(tmp_path):
    log_file = tmp_path / "cinemarathon.log"

    logger = setup_structured_logger("cinemarathon.test_file", "DEBUG", str(log_file))
    logger.info("written")
    for handler in logger.handlers:
        handler.flush()

    assert isinstance(logger.handlers[0], RichHandler)
    assert json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])["message"] == "written"
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_structured_logger_replaces_handlers():
    setup_structured_logger("cinemarathon.test_repeat", use_rich_console=False)
    logger = setup_structured_logger("cinemarathon.test_repeat", "ERROR", use_rich_console=False)

    assert len(logger.handlers) == 1
    assert logger.level == logging.ERROR
    assert not logger.propagate


def test_log_operation_error_includes_context(caplog):
    logger = logging.getLogger("tests.log_operation_error")
    error = create_source_error("youtube", "video_search", "down", ErrorCode.NETWORK_ERROR, query="heat")

    with caplog.at_level(logging.WARNING, logger=logger.name):
        log_operation_error(logger, error, additional_context={"movie_id": 1}, level=logging.WARNING)

    record = caplog.records[0]
    assert record.message == "down"
    assert record.error_code == "NETWORK_ERROR"
    assert record.operation == "video_search"
    assert record.context["source"] == "youtube"
    assert record.context["movie_id"] == 1


def test_log_operation_success_is_debug(caplog):
    logger = logging.getLogger("tests.log_operation_success")

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        log_operation_success(logger, "enrich_batch", 12.5, {"success_count": 3})

    assert caplog.records[0].levelno == logging.DEBUG
    assert caplog.records[0].result_info == {"success_count": 3}
