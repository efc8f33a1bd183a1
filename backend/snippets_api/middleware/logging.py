"""
Snippets API — Request Logging Middleware
==========================================

What:  One access-log line per request: method, path, status, duration,
       client address and request id.
How:   Times the downstream call; the level follows the status class so
       that 5xx responses can be alerted on separately from client errors.

Logged vs not logged:
    ✅ method, path (no query string), status, duration, client IP, request id
    ❌ request bodies (snippet code), Authorization headers, search terms
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from snippets_api.middleware.request_id import request_id_var

logger = logging.getLogger("snippets_api.access")

# Probes hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emits the access line after the response is produced."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        logger.log(
            level_for_status(response.status_code),
            "%s %s → %d in %.1fms (%s)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            client_address(request),
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": elapsed_ms,
                "client_ip": client_address(request),
                "rid": request_id_var.get(""),
            },
        )
        return response
