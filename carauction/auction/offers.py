"""Offer submission against an open listing."""

from __future__ import annotations

import logging

from ..ledger.fsm import ListingEvent, is_open, transition
from ..ledger.records import Offer
from ..ledger.repository import EntityRepository
from ..result import ErrorKind, Ok, Result, fail

logger = logging.getLogger(__name__)


class OfferValidator:
    def __init__(self, repository: EntityRepository) -> None:
        self._repository = repository

    async def submit_offer(self, bid_price: int, listing_key: str, member_key: str) -> Result[None]:
        listing = await self._repository.get_listing(listing_key)
        if listing is None:
            return fail(ErrorKind.RECORD_NOT_FOUND, f"listing does not exist: {listing_key}")
        if not is_open(listing.listing_state):
            return fail(ErrorKind.LISTING_CLOSED, f"listing {listing_key} is already sold")

        vehicle = await self._repository.get_vehicle(listing.vehicle)
        if vehicle is None:
            return fail(ErrorKind.RECORD_NOT_FOUND, f"vehicle does not exist: {listing.vehicle}")

        member = await self._repository.get_member(member_key)
        if member is None:
            return fail(ErrorKind.RECORD_NOT_FOUND, f"member does not exist: {member_key}")

        if member.balance < bid_price:
            return fail(
                ErrorKind.INSUFFICIENT_BALANCE,
                f"bid of {bid_price} exceeds balance of {member.balance}",
            )
        if vehicle.owner == member_key:
            return fail(ErrorKind.SELF_BID_NOT_ALLOWED, "owner cannot bid on own item")

        listing.listing_state = transition(listing.listing_state, ListingEvent.OFFER_RECEIVED)
        listing.offers.append(Offer(bid_price=bid_price, listing=listing_key, member=member_key))
        self._repository.put_listing(listing_key, listing)
        logger.info(
            "offer accepted listing=%s member=%s bid=%d offers=%d",
            listing_key,
            member_key,
            bid_price,
            len(listing.offers),
        )
        return Ok(None)
