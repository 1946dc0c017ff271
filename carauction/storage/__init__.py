"""Storage backend factory."""

from __future__ import annotations

from typing import Mapping, Protocol

from ..config import ServerConfig
from .in_memory import InMemoryStorage
from .postgres import PostgresStorage
from .redis import RedisStorage
from .firestore import FirestoreStorage


class LedgerStorage(Protocol):
    async def get_state(self, key: str) -> bytes | None: ...

    async def put_states(self, writes: Mapping[str, bytes]) -> None:
        """Apply every write or none of them."""
        ...

    async def list_states(self) -> dict[str, bytes]: ...


def build_storage(config: ServerConfig) -> LedgerStorage:
    backend = config.ledger.backend
    options = dict(config.ledger.options)
    if backend == "in_memory":
        return InMemoryStorage()
    if backend == "redis":
        return RedisStorage(**options)
    if backend == "postgres":
        return PostgresStorage(**options)
    if backend == "firestore":
        return FirestoreStorage(**options)
    raise ValueError(f"unknown storage backend {backend}")
