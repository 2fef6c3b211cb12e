"""
Post request handling.

Each function runs one storage call for a request and turns storage failures
into HTTP errors:
- NotFoundError -> 404 on direct lookups, 500 on edit/delete
- any other StorageError -> 500

The logger passed in is already bound to the request's trace id.
"""

from __future__ import annotations

from fastapi import HTTPException, status
from structlog.typing import FilteringBoundLogger

from core import db

from . import schemas
from .repository import PostRepository


def _storage_failure(
    log: FilteringBoundLogger,
    event: str,
    exc: db.StorageError,
    *,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    **fields: object,
) -> HTTPException:
    log.error(event, error=str(exc), status_code=status_code, **fields)
    return HTTPException(status_code=status_code, detail=str(exc))


async def list_posts(repository: PostRepository, *, log: FilteringBoundLogger) -> list[schemas.Post]:
    log.info("handling_list_posts")
    try:
        rows = await repository.list_posts()
    except db.StorageError as exc:
        raise _storage_failure(log, "list_posts_failed", exc) from exc

    posts = [schemas.Post.model_validate(row) for row in rows]
    log.info("list_posts_succeeded", count=len(posts))
    return posts


async def get_post(
    repository: PostRepository,
    post_id: int,
    *,
    log: FilteringBoundLogger,
) -> schemas.Post:
    log.info("handling_get_post", post_id=post_id)
    try:
        row = await repository.get_post(post_id)
    except db.NotFoundError as exc:
        raise _storage_failure(
            log,
            "get_post_failed",
            exc,
            status_code=status.HTTP_404_NOT_FOUND,
            post_id=post_id,
        ) from exc
    except db.StorageError as exc:
        raise _storage_failure(log, "get_post_failed", exc, post_id=post_id) from exc

    log.info("get_post_succeeded", post_id=post_id)
    return schemas.Post.model_validate(row)


async def create_post(
    repository: PostRepository,
    payload: schemas.CreatePostRequest,
    *,
    log: FilteringBoundLogger,
) -> schemas.Post:
    log.info("handling_create_post")
    try:
        row = await repository.create_post(
            title=payload.title,
            author=payload.author,
            content=payload.content,
        )
    except db.StorageError as exc:
        raise _storage_failure(log, "create_post_failed", exc) from exc

    post = schemas.Post.model_validate(row)
    log.info("create_post_succeeded", post_id=post.id)
    return post


async def edit_post(
    repository: PostRepository,
    post_id: int,
    payload: schemas.EditPostRequest,
    *,
    log: FilteringBoundLogger,
) -> int:
    log.info("handling_edit_post", post_id=post_id)
    # The path id is authoritative; a body id may only repeat it.
    if payload.id is not None and payload.id != post_id:
        log.warning("edit_post_rejected", post_id=post_id, body_id=payload.id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Post id in body does not match the URL.",
        )

    try:
        rows_affected = await repository.edit_post(post_id, content=payload.content)
    except db.StorageError as exc:
        raise _storage_failure(log, "edit_post_failed", exc, post_id=post_id) from exc

    log.info("edit_post_succeeded", post_id=post_id, rows_affected=rows_affected)
    return rows_affected


async def delete_post(
    repository: PostRepository,
    post_id: int,
    *,
    log: FilteringBoundLogger,
) -> int:
    log.info("handling_delete_post", post_id=post_id)
    try:
        rows_deleted = await repository.delete_post(post_id)
    except db.StorageError as exc:
        raise _storage_failure(log, "delete_post_failed", exc, post_id=post_id) from exc

    log.info("delete_post_succeeded", post_id=post_id, rows_deleted=rows_deleted)
    return rows_deleted
