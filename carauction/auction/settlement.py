"""Closing a listing: winner selection, reserve check and settlement."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..ledger.fsm import ListingEvent, ListingState, is_open, transition
from ..ledger.records import Member, Offer, Vehicle, VehicleListing
from ..ledger.repository import EntityRepository
from ..result import ErrorKind, Ok, Result, fail
from .selection import select_winner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementOutcome:
    listing: str
    state: ListingState
    winning_offer: Offer
    seller: str | None = None

    def to_dict(self) -> dict:
        payload = {
            "listing": self.listing,
            "listingState": self.state.value,
            "winningOffer": self.winning_offer.to_dict(),
        }
        if self.seller is not None:
            payload["seller"] = self.seller
        return payload


class SettlementEngine:
    def __init__(self, repository: EntityRepository) -> None:
        self._repository = repository

    async def close_bidding(self, listing_key: str) -> Result[SettlementOutcome]:
        listing = await self._repository.get_listing(listing_key)
        if listing is None:
            return fail(ErrorKind.RECORD_NOT_FOUND, f"listing does not exist: {listing_key}")
        if not is_open(listing.listing_state):
            return fail(ErrorKind.LISTING_CLOSED, f"listing {listing_key} is already sold")

        winner = select_winner(listing.offers)
        if winner is None:
            return fail(ErrorKind.NO_OFFERS_EXIST, f"offers do not exist for listing {listing_key}")

        if winner.bid_price < listing.reserve_price:
            return self._reserve_not_met(listing_key, listing, winner)
        return await self._settle(listing_key, listing, winner)

    def _reserve_not_met(
        self, listing_key: str, listing: VehicleListing, winner: Offer
    ) -> Result[SettlementOutcome]:
        listing.listing_state = transition(
            listing.listing_state, ListingEvent.CLOSED_RESERVE_NOT_MET
        )
        self._repository.put_listing(listing_key, listing)
        logger.info(
            "reserve not met listing=%s top_bid=%d reserve=%d",
            listing_key,
            winner.bid_price,
            listing.reserve_price,
        )
        return Ok(SettlementOutcome(listing_key, listing.listing_state, winner))

    async def _settle(
        self, listing_key: str, listing: VehicleListing, winner: Offer
    ) -> Result[SettlementOutcome]:
        buyer = await self._repository.get_member(winner.member)
        if buyer is None:
            return fail(ErrorKind.RECORD_NOT_FOUND, f"buyer does not exist: {winner.member}")
        vehicle = await self._repository.get_vehicle(listing.vehicle)
        if vehicle is None:
            return fail(ErrorKind.RECORD_NOT_FOUND, f"vehicle does not exist: {listing.vehicle}")
        seller_key = vehicle.owner
        seller = await self._repository.get_member(seller_key)
        if seller is None:
            return fail(ErrorKind.RECORD_NOT_FOUND, f"seller does not exist: {seller_key}")
        # Ownership may have moved to the bidder after the offer was accepted.
        if seller_key == winner.member:
            return fail(
                ErrorKind.SELF_BID_NOT_ALLOWED,
                f"winning bidder {winner.member} already owns vehicle {listing.vehicle}",
            )

        self._transfer(buyer, seller, winner.bid_price)
        if buyer.balance < 0:
            logger.warning(
                "buyer %s balance went negative (%d) settling listing %s",
                winner.member,
                buyer.balance,
                listing_key,
            )
        vehicle.owner = winner.member
        listing.offers = []
        listing.listing_state = transition(listing.listing_state, ListingEvent.CLOSED_RESERVE_MET)

        self._write_settlement(
            listing_key, listing, winner.member, buyer, seller_key, seller, vehicle
        )
        logger.info(
            "listing %s sold to %s by %s for %d",
            listing_key,
            winner.member,
            seller_key,
            winner.bid_price,
        )
        return Ok(SettlementOutcome(listing_key, listing.listing_state, winner, seller=seller_key))

    @staticmethod
    def _transfer(buyer: Member, seller: Member, amount: int) -> None:
        buyer.balance -= amount
        seller.balance += amount

    def _write_settlement(
        self,
        listing_key: str,
        listing: VehicleListing,
        buyer_key: str,
        buyer: Member,
        seller_key: str,
        seller: Member,
        vehicle: Vehicle,
    ) -> None:
        self._repository.put_member(buyer_key, buyer)
        self._repository.put_member(seller_key, seller)
        self._repository.put_listing(listing_key, listing)
        self._repository.put_vehicle(listing.vehicle, vehicle)
