"""Per-invocation view of the ledger with buffered writes."""

from __future__ import annotations

import logging

from ..storage import LedgerStorage

logger = logging.getLogger(__name__)


class LedgerTransaction:
    """Reads go straight to storage; writes are held until :meth:`commit`.

    Reads never observe this transaction's own pending writes, matching the
    world-state semantics of the replicated ledger. A transaction that is
    never committed leaves storage untouched.
    """

    def __init__(self, storage: LedgerStorage) -> None:
        self._storage = storage
        self._writes: dict[str, bytes] = {}
        self._committed = False

    async def get_state(self, key: str) -> bytes | None:
        value = await self._storage.get_state(key)
        if not value:
            return None
        return value

    def put_state(self, key: str, value: bytes) -> None:
        if self._committed:
            raise RuntimeError("transaction already committed")
        if not key:
            raise ValueError("ledger key must not be empty")
        # Re-putting a key keeps its original slot in the write order.
        self._writes[key] = value

    @property
    def pending_keys(self) -> list[str]:
        return list(self._writes)

    async def commit(self) -> None:
        if self._committed:
            raise RuntimeError("transaction already committed")
        self._committed = True
        if not self._writes:
            return
        await self._storage.put_states(dict(self._writes))
        logger.debug("committed %d writes: %s", len(self._writes), ", ".join(self._writes))
