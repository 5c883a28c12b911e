# barberbook/core/middleware.py
"""Request tracing middleware"""
import time
import uuid
import logging

from starlette.requests import Request

from barberbook.utils.my_logging import correlation_id_var

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Tag the request (and every log line it produces) with a correlation id"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:12]
    request.state.correlation_id = correlation_id
    token = correlation_id_var.set(correlation_id)

    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token)

    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """One line per request; failed bookings and dashboard errors log as warnings"""
    started = time.perf_counter()

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    level = logging.WARNING if response.status_code >= 400 else logging.INFO
    logger.log(
        level,
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms} ms)",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "-"),
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
    )

    return response
