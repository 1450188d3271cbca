"""Loguru setup: JSON lines in production, colored console otherwise."""

import logging
import sys
from functools import lru_cache

from loguru import logger

from booking_analytics.config import Settings

_DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Standard library loggers routed into loguru, with their minimum level
_INTERCEPTED = {
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.WARNING,  # LoggingMiddleware already logs requests
    "fastapi": logging.INFO,
    "pymongo": logging.WARNING,
}


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru, keeping the caller location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


@lru_cache
def setup_logging() -> None:
    """Configure loguru once for the configured environment."""
    settings = Settings()

    # Records logged outside a request carry a placeholder id
    logger.configure(extra={"request_id": "-"})
    logger.remove()

    if settings.environment == "production":
        logger.add(sys.stdout, level=settings.log_level, serialize=True)
    else:
        logger.add(sys.stdout, format=_DEV_FORMAT, level=settings.log_level, colorize=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name, level in _INTERCEPTED.items():
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
        std_logger.setLevel(level)

    logger.info(
        "Logging configured",
        environment=settings.environment,
        level=settings.log_level,
        storage_backend=settings.storage_backend,
    )
