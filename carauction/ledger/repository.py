"""Typed access to members, vehicles and listings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Type

from .records import (
    Member,
    R,
    Record,
    Vehicle,
    VehicleListing,
    decode_record,
    encode_record,
)
from .transaction import LedgerTransaction


@dataclass
class EntityRepository:
    tx: LedgerTransaction

    async def _get(self, record_type: Type[R], key: str) -> R | None:
        raw = await self.tx.get_state(key)
        if raw is None:
            return None
        return decode_record(record_type, raw)

    def _put(self, key: str, record: Record) -> None:
        self.tx.put_state(key, encode_record(record))

    async def get_member(self, key: str) -> Member | None:
        return await self._get(Member, key)

    async def get_vehicle(self, key: str) -> Vehicle | None:
        return await self._get(Vehicle, key)

    async def get_listing(self, key: str) -> VehicleListing | None:
        return await self._get(VehicleListing, key)

    def put_member(self, key: str, member: Member) -> None:
        self._put(key, member)

    def put_vehicle(self, key: str, vehicle: Vehicle) -> None:
        self._put(key, vehicle)

    def put_listing(self, key: str, listing: VehicleListing) -> None:
        self._put(key, listing)

    async def get_raw(self, key: str) -> bytes | None:
        return await self.tx.get_state(key)
