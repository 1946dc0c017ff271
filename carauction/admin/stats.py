"""Operational stats endpoint."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from fastapi import APIRouter, Depends, Request

from ..ledger.records import Member, MalformedRecordError, VehicleListing, decode_any
from ..storage import LedgerStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_storage(request: Request) -> LedgerStorage:
    return request.app.state.storage


@router.get("/stats")
async def stats(storage: LedgerStorage = Depends(_get_storage)) -> dict[str, Any]:
    states = await storage.list_states()
    records_by_type: Counter[str] = Counter()
    listings_by_state: Counter[str] = Counter()
    open_offers = 0
    total_balance = 0
    unreadable = 0

    for key, raw in states.items():
        try:
            record = decode_any(raw)
        except MalformedRecordError:
            logger.warning("skipping unreadable ledger value at %s", key)
            unreadable += 1
            continue
        records_by_type[record.DOC_TYPE] += 1
        if isinstance(record, Member):
            total_balance += record.balance
        elif isinstance(record, VehicleListing):
            listings_by_state[record.listing_state.value] += 1
            open_offers += len(record.offers)

    return {
        "records_by_type": dict(records_by_type),
        "listings_by_state": dict(listings_by_state),
        "open_offers": open_offers,
        "total_member_balance": total_balance,
        "unreadable_records": unreadable,
    }
