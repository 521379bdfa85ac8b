"""FastAPI middleware for request/response handling."""

from __future__ import annotations

import time

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ehonlend.core.tracing import generate_trace_id, trace_context

logger = structlog.get_logger("ehonlend.middleware")

TRACE_ID_HEADER = "X-Trace-ID"


def api_area(path: str) -> str | None:
    """First path segment under /api ("search", "books", "isbn", ...)."""
    parts = path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] == "api" and parts[1]:
        return parts[1]
    return None


class TracingMiddleware(BaseHTTPMiddleware):
    """Run each request in its own trace context.

    The trace ID comes from the X-Trace-ID request header or is generated,
    and is echoed back on the response. Log lines emitted while handling the
    request carry the trace ID and the API area.
    """

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get(TRACE_ID_HEADER) or generate_trace_id()
        path = request.url.path

        with trace_context(trace_id, api_area=api_area(path)):
            started = time.perf_counter()
            response = await call_next(request)
            response.headers[TRACE_ID_HEADER] = trace_id

            logger.debug(
                "Request completed",
                method=request.method,
                path=path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

            return response
