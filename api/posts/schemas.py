"""
Pydantic schemas for post endpoints.

Field names are snake_case in Python and camelCase on the wire
(`postTime`, `traceId`, ...). Every response model carries `traceId`.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    author: str
    content: str
    post_time: datetime = Field(alias="postTime")
    edit_time: datetime | None = Field(default=None, alias="editTime")


class CreatePostRequest(BaseModel):
    # id/postTime/editTime are server-owned; extra keys are ignored.
    title: str = ""
    author: str = ""
    content: str = ""


class EditPostRequest(BaseModel):
    id: int | None = None
    content: str


class Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    trace_id: str = Field(alias="traceId")


class PostListResponse(Envelope):
    items: list[Post]


class PostCreatedResponse(Envelope):
    items: Post


class PostDetailResponse(Envelope):
    post: Post


class PostEditedResponse(Envelope):
    rows_affected: int = Field(alias="rowsAffected")


class PostDeletedResponse(Envelope):
    rows_deleted: int = Field(alias="rowsDeleted")


class ErrorResponse(Envelope):
    error: str
