"""Postgres storage backend leveraging asyncpg."""

from __future__ import annotations

from typing import Any, Mapping

import asyncpg


class PostgresStorage:
    def __init__(self, *, dsn: str | None = None, **connect_kwargs: Any) -> None:
        if not dsn and not connect_kwargs:
            raise ValueError("postgres connection details missing")
        self._dsn = dsn
        self._connect_kwargs = connect_kwargs
        self._pool: asyncpg.Pool | None = None

    async def _ensure_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            self._pool = await asyncpg.create_pool(dsn=self._dsn, **self._connect_kwargs)
            async with self._pool.acquire() as conn:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS ledger_state (
                        key TEXT PRIMARY KEY,
                        value BYTEA NOT NULL,
                        updated_at TIMESTAMP DEFAULT NOW()
                    );
                    """
                )
        return self._pool

    async def get_state(self, key: str) -> bytes | None:
        pool = await self._ensure_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow("""SELECT value FROM ledger_state WHERE key=$1""", key)
        if not row:
            return None
        return bytes(row["value"])

    async def put_states(self, writes: Mapping[str, bytes]) -> None:
        if not writes:
            return
        pool = await self._ensure_pool()
        async with pool.acquire() as conn:
            async with conn.transaction():
                await conn.executemany(
                    """INSERT INTO ledger_state(key, value) VALUES($1, $2)
                       ON CONFLICT (key) DO UPDATE SET value=EXCLUDED.value, updated_at=NOW()""",
                    list(writes.items()),
                )

    async def list_states(self) -> dict[str, bytes]:
        pool = await self._ensure_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch("SELECT key, value FROM ledger_state ORDER BY key")
        return {row["key"]: bytes(row["value"]) for row in rows}
