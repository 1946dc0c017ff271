"""Tests for offer submission."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from carauction.ledger.fsm import ListingState
from carauction.ledger.records import Member, Offer, Vehicle, VehicleListing
from carauction.result import Err, ErrorKind

from ledger_fixtures import (
    LISTING,
    MEMBER_A,
    MEMBER_B,
    MEMBER_C,
    VEHICLE,
    invoke,
    load,
    seeded_storage,
)


class TestValidOffers:
    @pytest.mark.asyncio
    async def test_offers_appended_in_submission_order(self):
        storage = await seeded_storage()

        assert (await invoke(storage, "makeOffer", "4000", LISTING, MEMBER_B)).ok
        assert (await invoke(storage, "makeOffer", "4500", LISTING, MEMBER_C)).ok
        assert (await invoke(storage, "makeOffer", "1000", LISTING, MEMBER_B)).ok

        listing = await load(storage, VehicleListing, LISTING)
        assert listing.offers == [
            Offer(bid_price=4000, listing=LISTING, member=MEMBER_B),
            Offer(bid_price=4500, listing=LISTING, member=MEMBER_C),
            Offer(bid_price=1000, listing=LISTING, member=MEMBER_B),
        ]
        assert listing.listing_state is ListingState.FOR_SALE

    @pytest.mark.asyncio
    async def test_only_the_listing_is_written(self):
        storage = await seeded_storage()
        before = await storage.list_states()
        storage.put_states = AsyncMock(wraps=storage.put_states)

        result = await invoke(storage, "makeOffer", "5000", LISTING, MEMBER_B)

        assert result.ok
        storage.put_states.assert_awaited_once()
        (writes,) = storage.put_states.await_args.args
        assert list(writes) == [LISTING]
        after = await storage.list_states()
        assert {k: v for k, v in after.items() if k != LISTING} == {
            k: v for k, v in before.items() if k != LISTING
        }

    @pytest.mark.asyncio
    async def test_bid_equal_to_balance_is_accepted(self):
        storage = await seeded_storage()
        result = await invoke(storage, "makeOffer", "5000", LISTING, MEMBER_C)
        assert result.ok

    @pytest.mark.asyncio
    async def test_offer_reopens_bidding_after_reserve_not_met(self):
        storage = await seeded_storage()
        await invoke(storage, "makeOffer", "3000", LISTING, MEMBER_B)
        await invoke(storage, "closeBidding", LISTING)

        result = await invoke(storage, "makeOffer", "3600", LISTING, MEMBER_C)

        assert result.ok
        listing = await load(storage, VehicleListing, LISTING)
        assert listing.listing_state is ListingState.RESERVE_NOT_MET
        assert [offer.bid_price for offer in listing.offers] == [3000, 3600]


class TestRejectedOffers:
    async def _assert_rejected(self, storage, args, kind):
        before = await storage.list_states()
        result = await invoke(storage, "makeOffer", *args)
        assert isinstance(result, Err)
        assert result.error.kind is kind
        assert await storage.list_states() == before
        return result

    @pytest.mark.asyncio
    async def test_insufficient_balance(self):
        storage = await seeded_storage()
        result = await self._assert_rejected(
            storage, ("5001", LISTING, MEMBER_B), ErrorKind.INSUFFICIENT_BALANCE
        )
        assert "5001" in result.error.message

    @pytest.mark.asyncio
    async def test_owner_cannot_bid_on_own_vehicle(self):
        storage = await seeded_storage()
        await self._assert_rejected(
            storage, ("4000", LISTING, MEMBER_A), ErrorKind.SELF_BID_NOT_ALLOWED
        )

    @pytest.mark.asyncio
    async def test_missing_listing(self):
        storage = await seeded_storage()
        result = await self._assert_rejected(
            storage, ("4000", "NOPE", MEMBER_B), ErrorKind.RECORD_NOT_FOUND
        )
        assert "listing" in result.error.message

    @pytest.mark.asyncio
    async def test_missing_vehicle(self):
        storage = await seeded_storage()
        await invoke(
            storage, "createVehicleListing", "L2", "100", "Ghost car", "FOR_SALE", "", "9999"
        )
        result = await self._assert_rejected(
            storage, ("4000", "L2", MEMBER_B), ErrorKind.RECORD_NOT_FOUND
        )
        assert "vehicle" in result.error.message

    @pytest.mark.asyncio
    async def test_missing_member(self):
        storage = await seeded_storage()
        result = await self._assert_rejected(
            storage, ("4000", LISTING, "ghost@acme.org"), ErrorKind.RECORD_NOT_FOUND
        )
        assert "member" in result.error.message

    @pytest.mark.asyncio
    async def test_sold_listing_accepts_no_offers(self):
        storage = await seeded_storage()
        await invoke(storage, "makeOffer", "4000", LISTING, MEMBER_B)
        assert (await invoke(storage, "closeBidding", LISTING)).ok

        await self._assert_rejected(storage, ("4000", LISTING, MEMBER_C), ErrorKind.LISTING_CLOSED)

    @pytest.mark.asyncio
    async def test_listing_checked_before_member(self):
        storage = await seeded_storage()
        await self._assert_rejected(
            storage, ("4000", "NOPE", "ghost@acme.org"), ErrorKind.RECORD_NOT_FOUND
        )

    @pytest.mark.asyncio
    async def test_balance_checked_before_ownership(self):
        storage = await seeded_storage()
        await self._assert_rejected(
            storage, ("9999", LISTING, MEMBER_A), ErrorKind.INSUFFICIENT_BALANCE
        )

    @pytest.mark.asyncio
    async def test_new_owner_cannot_bid_after_transfer(self):
        storage = await seeded_storage()
        await invoke(storage, "createVehicle", VEHICLE, MEMBER_C)
        await self._assert_rejected(
            storage, ("100", LISTING, MEMBER_C), ErrorKind.SELF_BID_NOT_ALLOWED
        )
        assert (await load(storage, Vehicle, VEHICLE)).owner == MEMBER_C
        assert (await load(storage, Member, MEMBER_A)).balance == 5000
