"""Tests for the stdlib-to-loguru logging bridge."""

import logging

from loguru import logger

from booking_analytics.log_config import InterceptHandler, setup_logging


def test_standard_logging_is_forwarded_to_loguru():
    messages = []
    sink_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    std_logger = logging.getLogger("booking_analytics.tests.bridge")
    std_logger.handlers = [InterceptHandler()]
    std_logger.propagate = False
    std_logger.setLevel(logging.INFO)

    try:
        std_logger.warning("store slow: %s ms", 250)
    finally:
        logger.remove(sink_id)

    [record] = messages
    assert record["message"] == "store slow: 250 ms"
    assert record["level"].name == "WARNING"


def test_setup_logging_quiets_driver_chatter():
    setup_logging.cache_clear()
    setup_logging()

    assert logging.getLogger("pymongo").level == logging.WARNING
    assert isinstance(logging.getLogger("uvicorn.access").handlers[0], InterceptHandler)
    assert not logging.getLogger("pymongo").propagate
