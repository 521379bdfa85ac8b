"""Request tracing support using structlog contextvars.

Every request runs inside a trace context: a trace id plus request-scoped
fields (the API area, the ranking query, the ISBN being resolved) that are
merged into each log line emitted while the request is handled.
"""

from __future__ import annotations

import uuid
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import structlog.contextvars as contextvars


def generate_trace_id() -> str:
    """Generate a unique trace ID.

    Returns:
        Hexadecimal trace ID (32 characters)
    """
    return uuid.uuid4().hex


def get_trace_id() -> str | None:
    """Get the current trace ID from context, or None if not set."""
    return contextvars.get_contextvars().get("trace_id")


def set_trace_id(trace_id: str) -> None:
    contextvars.bind_contextvars(trace_id=trace_id)


def clear_trace_id() -> None:
    """Clear the trace ID and every request field from context."""
    contextvars.clear_contextvars()


def bind_request_fields(**fields: Any) -> None:
    """Attach fields to every log line of the current request.

    None values are skipped, so optional request parameters (an absent
    author or ISBN) don't show up as nulls in the logs.
    """
    present = {key: value for key, value in fields.items() if value is not None}
    if present:
        contextvars.bind_contextvars(**present)


@contextmanager
def trace_context(trace_id: str | None = None, **fields: Any) -> Generator[str]:
    """Run a block inside a fresh trace context.

    Binds the trace ID and any extra request fields, then restores the
    previous context on exit.

    Args:
        trace_id: Trace ID to use; a new one is generated when None
        **fields: Request fields to bind alongside the trace ID

    Yields:
        The trace ID being used

    Example:
        >>> with trace_context(api_area="search") as trace_id:
        ...     logger.info("Candidates ranked")  # carries trace_id and api_area
    """
    old_context = dict(contextvars.get_contextvars())

    if trace_id is None:
        trace_id = generate_trace_id()

    contextvars.clear_contextvars()
    contextvars.bind_contextvars(trace_id=trace_id)
    bind_request_fields(**fields)

    try:
        yield trace_id
    finally:
        contextvars.clear_contextvars()
        if old_context:
            contextvars.bind_contextvars(**old_context)
