"""In-memory world state for local runs and tests."""

from __future__ import annotations

import asyncio
from typing import Mapping


class InMemoryStorage:
    def __init__(self) -> None:
        self._state: dict[str, bytes] = {}
        self._lock = asyncio.Lock()

    async def get_state(self, key: str) -> bytes | None:
        async with self._lock:
            return self._state.get(key)

    async def put_states(self, writes: Mapping[str, bytes]) -> None:
        batch = dict(writes)
        for key, value in batch.items():
            if not key:
                raise ValueError("ledger key must not be empty")
            if not isinstance(value, (bytes, bytearray)):
                raise TypeError(f"value for {key} must be bytes")
        async with self._lock:
            self._state.update({key: bytes(value) for key, value in batch.items()})

    async def list_states(self) -> dict[str, bytes]:
        async with self._lock:
            return dict(self._state)
