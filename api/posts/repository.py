"""
Post persistence (raw SQL).
This module is where post-related SQL lives.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from structlog.typing import FilteringBoundLogger

from core import db

_POST_COLUMNS = "id, title, author, content, postTime, editTime"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PostRepository:
    def __init__(self, database: db.Database, *, logger: FilteringBoundLogger) -> None:
        self._db = database
        self._log = logger.bind(component="post_repository")

    @classmethod
    async def initialize(cls, path: str, *, logger: FilteringBoundLogger) -> PostRepository:
        """
        Open (or create) the SQLite file at `path` and make sure the posts
        table exists. Safe to run against an existing database.
        """
        database = await db.Database.connect(path)
        try:
            await database.execute(
                """
                CREATE TABLE IF NOT EXISTS posts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT,
                    author TEXT,
                    content TEXT,
                    postTime DATETIME,
                    editTime DATETIME
                )
                """
            )
        except db.StorageError as exc:
            await database.close()
            raise db.StorageError(f"failed to create tables: {exc}") from exc

        repository = cls(database, logger=logger)
        repository._log.info("database_initialized", path=path)
        return repository

    async def close(self) -> None:
        await self._db.close()
        self._log.info("database_closed", path=self._db.path)

    async def list_posts(self) -> list[dict[str, Any]]:
        return await self._db.fetch_all(
            f"""
            SELECT {_POST_COLUMNS}
            FROM posts
            ORDER BY id ASC
            """
        )

    async def get_post(self, post_id: int) -> dict[str, Any]:
        row = await self._db.fetch_one(
            f"""
            SELECT {_POST_COLUMNS}
            FROM posts
            WHERE id = ?
            """,
            post_id,
        )
        if row is None:
            raise db.NotFoundError(f"no post found with id: {post_id}")
        return row

    async def create_post(self, *, title: str, author: str, content: str) -> dict[str, Any]:
        """
        Insert a post and return it as stored, with its new id and postTime.
        """
        post_time = _utc_now().isoformat()
        result = await self._db.execute(
            """
            INSERT INTO posts (title, author, content, postTime)
            VALUES (?, ?, ?, ?)
            """,
            title,
            author,
            content,
            post_time,
        )
        if result.lastrowid is None:
            raise db.StorageError("Failed to create post.")

        self._log.debug("post_inserted", post_id=result.lastrowid)
        return {
            "id": int(result.lastrowid),
            "title": title,
            "author": author,
            "content": content,
            "postTime": post_time,
            "editTime": None,
        }

    async def edit_post(self, post_id: int, *, content: str) -> int:
        result = await self._db.execute(
            """
            UPDATE posts
            SET content = ?, editTime = ?
            WHERE id = ?
            """,
            content,
            _utc_now().isoformat(),
            post_id,
        )
        if result.rowcount == 0:
            raise db.NotFoundError("no rows affected, post not found")
        return result.rowcount

    async def delete_post(self, post_id: int) -> int:
        result = await self._db.execute(
            """
            DELETE FROM posts
            WHERE id = ?
            """,
            post_id,
        )
        if result.rowcount == 0:
            raise db.NotFoundError("no rows affected, post not found")
        self._log.debug("post_deleted", post_id=post_id)
        return result.rowcount
