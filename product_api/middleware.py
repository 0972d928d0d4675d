"""
Request logging and last-resort exception handling.

``RequestLoggingMiddleware`` is mounted outermost so every request is
logged before anything else runs.  ``ExceptionHandlingMiddleware`` sits
inside it and converts exceptions no handler claimed into the generic
500 error body.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import render_unhandled

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        url = request.url.path + (f"?{request.url.query}" if request.url.query else "")

        logger.info("%s %s", request.method, url)
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info("%s %s -> %s (%.1f ms)", request.method, url, response.status_code, duration_ms)
        response.headers["X-Request-ID"] = request_id
        return response


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return render_unhandled(exc)
