"""Request logging for the booking analytics API."""

import time
from uuid import uuid4

from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each report request under a correlation id.

    An incoming ``X-Request-ID`` is reused so report requests can be traced
    across the marketplace backend and this service. Requests that end in a
    store failure (5xx) log at warning level; unhandled errors are logged
    with their traceback and re-raised.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex[:8]
        start = time.perf_counter()

        with logger.contextualize(request_id=request_id, path=request.url.path):
            logger.debug("Request started", method=request.method, query=str(request.query_params))
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Request failed", duration_ms=_elapsed_ms(start))
                raise

            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "{method} {status_code}",
                method=request.method,
                status_code=response.status_code,
                duration_ms=_elapsed_ms(start),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
