"""Helpers shared by the unit tests."""

from __future__ import annotations

from typing import Type

from carauction.contract import registry
from carauction.ledger.records import Member, R, decode_record
from carauction.result import Result
from carauction.storage.in_memory import InMemoryStorage

MEMBER_A = "memberA@acme.org"
MEMBER_B = "memberB@acme.org"
MEMBER_C = "memberC@acme.org"
VEHICLE = "1234"
LISTING = "ABCD"


async def invoke(storage: InMemoryStorage, fcn: str, *args: str) -> Result:
    return await registry.invoke(storage, fcn, list(args))


async def seeded_storage() -> InMemoryStorage:
    storage = InMemoryStorage()
    result = await invoke(storage, "initLedger")
    assert result.ok
    return storage


async def load(storage: InMemoryStorage, record_type: Type[R], key: str) -> R:
    raw = await storage.get_state(key)
    assert raw is not None, f"{key} missing"
    return decode_record(record_type, raw)


async def total_balance(storage: InMemoryStorage) -> int:
    total = 0
    for key in (MEMBER_A, MEMBER_B, MEMBER_C):
        total += (await load(storage, Member, key)).balance
    return total
