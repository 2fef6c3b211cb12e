"""
Dependencies shared by the post routes.
"""

from __future__ import annotations

from fastapi import Depends, Request
from structlog.typing import FilteringBoundLogger

from core import tracing

from .repository import PostRepository


def get_repository(request: Request) -> PostRepository:
    return request.app.state.posts


def get_request_logger(
    request: Request,
    trace_id: str = Depends(tracing.get_trace_id),
) -> FilteringBoundLogger:
    return request.app.state.logger.bind(trace_id=trace_id)
