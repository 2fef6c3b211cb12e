"""
Async database access helpers (raw SQL) using aiosqlite.

A `Database` wraps one SQLite connection. FastAPI opens it on startup and
closes it on shutdown (see `api/main.py`); callers receive it explicitly
instead of reaching for a module-level pool.

SQL parameter style:
- sqlite uses positional placeholders: ?, ?, ?, ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import aiosqlite

# Largest value SQLite can bind as an INTEGER; bigger Python ints overflow.
SQLITE_MAX_INTEGER = 2**63 - 1


# Storage failures are explicit and separable from other runtime errors.
class StorageError(RuntimeError):
    pass


class NotFoundError(StorageError):
    pass


@dataclass(frozen=True)
class WriteResult:
    rowcount: int
    lastrowid: int | None


class Database:
    def __init__(self, connection: aiosqlite.Connection, *, path: str) -> None:
        self._connection = connection
        self.path = path

    @classmethod
    async def connect(cls, path: str) -> Database:
        try:
            connection = await aiosqlite.connect(path)
        except aiosqlite.Error as exc:
            raise StorageError(f"failed to connect to database: {exc}") from exc
        connection.row_factory = aiosqlite.Row
        return cls(connection, path=path)

    async def close(self) -> None:
        try:
            await self._connection.close()
        except aiosqlite.Error as exc:
            raise StorageError(f"failed to close database: {exc}") from exc

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            async with self._connection.execute(sql, args) as cursor:
                row = await cursor.fetchone()
        except (aiosqlite.Error, OverflowError) as exc:
            raise StorageError(str(exc)) from exc
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            async with self._connection.execute(sql, args) as cursor:
                rows = await cursor.fetchall()
        except (aiosqlite.Error, OverflowError) as exc:
            raise StorageError(str(exc)) from exc
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> WriteResult:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and commit it.
        """
        try:
            cursor = await self._connection.execute(sql, args)
            await self._connection.commit()
        except (aiosqlite.Error, OverflowError) as exc:
            raise StorageError(str(exc)) from exc
        result = WriteResult(rowcount=cursor.rowcount, lastrowid=cursor.lastrowid)
        await cursor.close()
        return result
