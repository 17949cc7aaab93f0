"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI creates it in the lifespan hook
and keeps it on `app.state` (see `api/main.py`); handlers receive it through
the `get_database` dependency.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg
from fastapi import Request

from .settings import Settings


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def affected_rows(status: str) -> int:
    """
    Parse the row count out of a command tag such as "DELETE 3" or "INSERT 0 1".
    """
    parts = (status or "").split()
    if not parts or not parts[-1].isdigit():
        return 0
    return int(parts[-1])


class Database:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    @classmethod
    async def connect(cls, settings: Settings) -> "Database":
        pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            # Connect lazily so an unreachable database fails requests, not startup.
            min_size=0,
            max_size=settings.pool_size,
            command_timeout=settings.command_timeout,
        )
        return cls(pool)

    async def close(self) -> None:
        await self._pool.close()

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE) and return the affected row count.
        """
        status = await self._pool.execute(sql, *args)
        return affected_rows(status)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Hold one pooled connection inside a transaction for the block.
        """
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                yield conn


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "db", None)
    if database is None:
        raise RuntimeError("DB pool is not initialized. Start the app through its lifespan.")
    return database
