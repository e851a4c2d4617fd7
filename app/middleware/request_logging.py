# app/middleware/request_logging.py
from __future__ import annotations

import logging
import time
import uuid
from typing import Iterable, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("app.request")


DEFAULT_IGNORED_PREFIXES: Tuple[str, ...] = (
    "/api/healthz",
    "/api/readyz",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
)


def _client_ip(request: Request) -> str:
    # Honor common proxy header if present
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    client = request.client
    return client.host if client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One log line per request with trace_id, caller and duration.
    Adds X-Request-ID to every response. Health/docs endpoints are not logged.
    """

    def __init__(self, app, ignored_prefixes: Iterable[str] = DEFAULT_IGNORED_PREFIXES):
        super().__init__(app)
        self.ignored_prefixes = tuple(ignored_prefixes)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        method = request.method.upper()

        trace_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.trace_id = trace_id

        skip = method == "OPTIONS" or any(path.startswith(p) for p in self.ignored_prefixes)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            if not skip:
                logger.exception(
                    "request CRASH %s %s ip=%s dur_ms=%s trace_id=%s",
                    method,
                    path,
                    _client_ip(request),
                    int((time.perf_counter() - start) * 1000),
                    trace_id,
                )
            raise

        response.headers["X-Request-ID"] = trace_id

        if skip:
            return response

        duration_ms = int((time.perf_counter() - start) * 1000)
        status = response.status_code

        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        # user_id / role are filled in by get_current_user on authenticated routes
        logger.log(
            level,
            "request %s %s -> %s user=%s role=%s ip=%s dur_ms=%s trace_id=%s",
            method,
            path,
            status,
            getattr(request.state, "user_id", "-"),
            getattr(request.state, "role", "-"),
            _client_ip(request),
            duration_ms,
            trace_id,
        )
        return response
