"""
Per-request trace ids.
"""

from __future__ import annotations

from uuid import uuid4

from fastapi import Request

TRACE_HEADER = "X-Trace-Id"


def resolve_trace_id(header_value: str | None) -> str:
    # Reuse the caller's id when it sent one, otherwise start a new trace.
    value = (header_value or "").strip()
    return value or str(uuid4())


def get_trace_id(request: Request) -> str:
    trace_id = getattr(request.state, "trace_id", None)
    if not trace_id:
        trace_id = resolve_trace_id(request.headers.get(TRACE_HEADER))
        request.state.trace_id = trace_id
    return trace_id
