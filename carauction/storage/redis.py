"""Redis storage backend using redis-py asyncio client."""

from __future__ import annotations

from typing import Mapping

from redis import asyncio as aioredis


class RedisStorage:
    def __init__(self, *, url: str, prefix: str = "carauction:ledger") -> None:
        if not url:
            raise ValueError("redis url missing")
        self._redis = aioredis.from_url(url)
        self._prefix = prefix.rstrip(":")

    def _state_key(self, key: str) -> str:
        return f"{self._prefix}:state:{key}"

    async def get_state(self, key: str) -> bytes | None:
        return await self._redis.get(self._state_key(key))

    async def put_states(self, writes: Mapping[str, bytes]) -> None:
        if not writes:
            return
        # MSET is applied atomically by the server.
        await self._redis.mset({self._state_key(key): value for key, value in writes.items()})

    async def list_states(self) -> dict[str, bytes]:
        pattern = self._state_key("*")
        keys: list[bytes] = []
        cursor = 0
        while True:
            cursor, batch = await self._redis.scan(cursor=cursor, match=pattern, count=100)
            keys.extend(batch)
            if cursor == 0:
                break
        if not keys:
            return {}
        values = await self._redis.mget(keys)
        offset = len(self._state_key(""))
        states: dict[str, bytes] = {}
        for raw_key, value in zip(keys, values):
            if value is None:
                continue
            name = raw_key.decode() if isinstance(raw_key, bytes) else raw_key
            states[name[offset:]] = value
        return states
