"""Request logging middleware.

One log line per request (method, path, status, duration), so endpoint
and service code stay free of access logging.
"""

import logging
import time

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.error(
            "%s %s -> failed after %.1f ms",
            request.method,
            request.url.path,
            elapsed_ms,
        )
        raise

    elapsed_ms = (time.perf_counter() - started) * 1000
    level = logging.WARNING if response.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "%s %s -> %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


def setup_request_logging(app: FastAPI) -> None:
    """Register the request logging middleware on the application."""
    app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)
