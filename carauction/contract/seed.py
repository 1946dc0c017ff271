"""Records written by initLedger."""

from __future__ import annotations

from ..ledger.fsm import ListingState
from ..ledger.records import Member, Vehicle, VehicleListing

SEED_MEMBERS: dict[str, Member] = {
    "memberA@acme.org": Member(first_name="Amy", last_name="Williams", balance=5000),
    "memberB@acme.org": Member(first_name="Billy", last_name="Thompson", balance=5000),
    "memberC@acme.org": Member(first_name="Tom", last_name="Werner", balance=5000),
}

SEED_VEHICLES: dict[str, Vehicle] = {
    "1234": Vehicle(owner="memberA@acme.org"),
}

SEED_LISTINGS: dict[str, VehicleListing] = {
    "ABCD": VehicleListing(
        reserve_price=3500,
        description="Arium Nova",
        listing_state=ListingState.FOR_SALE,
        vehicle="1234",
    ),
}
