"""
MyGram Backend - Request Logging Middleware
============================================

What:  One structured access-log line per HTTP request.
How:   Measures wall time around the downstream handler and logs method,
       path, status, duration, request id, acting user and client IP.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware (uses the request id for correlation).

Log line (text form; the same fields are attached as `extra`):
    PUT /photos/3 403 4.2ms [a1b2c3d4] user=7 from 192.168.1.100

    extra = {
        "request_id": "a1b2c3d4",
        "method": "PUT",
        "path": "/photos/3",
        "status": 403,
        "duration_ms": 4.21,
        "client_ip": "192.168.1.100",
        "user_id": 7,
    }

Acting user:
    `user_id` comes from request.state, which the get_current_user_id
    dependency fills once the bearer token verified. Public routes
    (register, login) and requests rejected for a bad token log `user=-`.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID, acting user id
    ❌ Don't log: request bodies (passwords, emails), Authorization header,
       the token itself
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from mygram.middleware.request_id import request_id_var

logger = logging.getLogger("mygram.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of each request.

    Level by status class:
        5xx     → ERROR   (server problem, investigate)
        4xx     → WARNING (403 ownership rejections and 401 token failures
                           show up here, which is what alerting keys on)
        2xx/3xx → INFO

    Duration covers everything below this middleware: auth dependency,
    validation, the service call and its queries, serialization.

    Typical durations (SQLite locally, PostgreSQL with a warm pool):
        - POST /users/login: 50-150ms (PBKDF2 dominates)
        - GET /comments: 5-30ms (one query plus memoized owner/photo lookups)
        - other routes: 2-10ms

    /health is skipped; probes hit it every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # perf_counter: monotonic, sub-microsecond resolution
        start_time = time.perf_counter()

        # request.client is None under ASGITransport in tests
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        # Set by get_current_user_id; absent on public or rejected requests
        user_id = getattr(request.state, "user_id", None)

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            user_id if user_id is not None else "-",
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "user_id": user_id,
            },
        )

        return response
