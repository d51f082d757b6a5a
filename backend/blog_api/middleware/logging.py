"""
Blog API — Request Logging Middleware
======================================

What:  One access log line per HTTP request.
Why:   Correlates every response with its request ID and duration.
How:   Measures time around call_next and logs method, path, status,
       duration, request ID and client IP on the "blog_api.access" logger.

Level by status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blog_api.middleware.request_id import request_id_var

logger = logging.getLogger("blog_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Logged information:
        - Request: method, path, client IP
        - Response: status code, duration in milliseconds
        - Correlation: request ID from RequestIDMiddleware
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Why time.perf_counter: monotonic and higher resolution than time.time()
        start_time = time.perf_counter()

        # Why the fallback: request.client is None for some ASGI servers and test clients
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        # Why: different levels enable severity-based alerting
        # 5xx → ERROR (server or store failure)
        # 4xx → WARNING (client error)
        # 2xx/3xx → INFO
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            # Structured fields for JSON formatters
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
