"""
Post API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from structlog.typing import FilteringBoundLogger

from core import db, tracing

from . import dependencies, schemas, service
from .repository import PostRepository

router = APIRouter()


@router.get("/posts")
async def list_posts(
    repository: PostRepository = Depends(dependencies.get_repository),
    log: FilteringBoundLogger = Depends(dependencies.get_request_logger),
    trace_id: str = Depends(tracing.get_trace_id),
) -> schemas.PostListResponse:
    posts = await service.list_posts(repository, log=log)
    return schemas.PostListResponse(items=posts, trace_id=trace_id)


@router.post("/posts")
async def create_post(
    payload: schemas.CreatePostRequest,
    repository: PostRepository = Depends(dependencies.get_repository),
    log: FilteringBoundLogger = Depends(dependencies.get_request_logger),
    trace_id: str = Depends(tracing.get_trace_id),
) -> schemas.PostCreatedResponse:
    post = await service.create_post(repository, payload, log=log)
    return schemas.PostCreatedResponse(items=post, trace_id=trace_id)


@router.get("/posts/{post_id}")
async def get_post(
    post_id: int = Path(..., ge=1, le=db.SQLITE_MAX_INTEGER),
    repository: PostRepository = Depends(dependencies.get_repository),
    log: FilteringBoundLogger = Depends(dependencies.get_request_logger),
    trace_id: str = Depends(tracing.get_trace_id),
) -> schemas.PostDetailResponse:
    post = await service.get_post(repository, post_id, log=log)
    return schemas.PostDetailResponse(post=post, trace_id=trace_id)


@router.put("/posts/{post_id}")
async def edit_post(
    payload: schemas.EditPostRequest,
    post_id: int = Path(..., ge=1, le=db.SQLITE_MAX_INTEGER),
    repository: PostRepository = Depends(dependencies.get_repository),
    log: FilteringBoundLogger = Depends(dependencies.get_request_logger),
    trace_id: str = Depends(tracing.get_trace_id),
) -> schemas.PostEditedResponse:
    rows_affected = await service.edit_post(repository, post_id, payload, log=log)
    return schemas.PostEditedResponse(rows_affected=rows_affected, trace_id=trace_id)


@router.delete("/posts/{post_id}")
async def delete_post(
    post_id: int = Path(..., ge=1, le=db.SQLITE_MAX_INTEGER),
    repository: PostRepository = Depends(dependencies.get_repository),
    log: FilteringBoundLogger = Depends(dependencies.get_request_logger),
    trace_id: str = Depends(tracing.get_trace_id),
) -> schemas.PostDeletedResponse:
    rows_deleted = await service.delete_post(repository, post_id, log=log)
    return schemas.PostDeletedResponse(rows_deleted=rows_deleted, trace_id=trace_id)
