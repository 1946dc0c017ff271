"""Handlers for every named ledger operation."""

from __future__ import annotations

from copy import deepcopy

from ..auction.offers import OfferValidator
from ..auction.settlement import SettlementEngine
from ..ledger.fsm import ListingState
from ..ledger.records import Member, Offer, Vehicle, VehicleListing
from ..ledger.repository import EntityRepository
from ..result import ErrorKind, Ok, Result, fail
from ..transport.canonical_json import canonical_dumps
from . import arguments as arg
from .dispatch import OperationRegistry, Payload
from .seed import SEED_LISTINGS, SEED_MEMBERS, SEED_VEHICLES

registry = OperationRegistry()


@registry.operation("initLedger")
async def init_ledger(repository: EntityRepository) -> Result[Payload]:
    for key, member in SEED_MEMBERS.items():
        repository.put_member(key, deepcopy(member))
    for key, vehicle in SEED_VEHICLES.items():
        repository.put_vehicle(key, deepcopy(vehicle))
    for key, listing in SEED_LISTINGS.items():
        repository.put_listing(key, deepcopy(listing))
    return Ok(None)


@registry.operation("query", arg.key)
async def query(repository: EntityRepository, key: str) -> Result[Payload]:
    raw = await repository.get_raw(key)
    if raw is None:
        return fail(ErrorKind.RECORD_NOT_FOUND, f"key does not exist: {key}")
    return Ok(raw)


@registry.operation("createVehicle", arg.key, arg.key)
async def create_vehicle(
    repository: EntityRepository, vehicle_key: str, owner_key: str
) -> Result[Payload]:
    repository.put_vehicle(vehicle_key, Vehicle(owner=owner_key))
    return Ok(None)


@registry.operation(
    "createVehicleListing",
    arg.key,
    arg.amount,
    arg.text,
    arg.listing_state,
    arg.offers,
    arg.key,
)
async def create_vehicle_listing(
    repository: EntityRepository,
    listing_key: str,
    reserve_price: int,
    description: str,
    listing_state: ListingState,
    offers: list[Offer],
    vehicle_key: str,
) -> Result[Payload]:
    for offer in offers:
        if offer.listing != listing_key:
            return fail(
                ErrorKind.INVALID_ARGUMENT,
                f"offer by {offer.member} references listing {offer.listing}, not {listing_key}",
            )
    listing = VehicleListing(
        reserve_price=reserve_price,
        description=description,
        listing_state=listing_state,
        vehicle=vehicle_key,
        offers=offers,
    )
    repository.put_listing(listing_key, listing)
    return Ok(None)


@registry.operation("createMember", arg.key, arg.text, arg.text, arg.amount)
async def create_member(
    repository: EntityRepository,
    member_key: str,
    first_name: str,
    last_name: str,
    balance: int,
) -> Result[Payload]:
    member = Member(first_name=first_name, last_name=last_name, balance=balance)
    repository.put_member(member_key, member)
    return Ok(None)


@registry.operation("makeOffer", arg.amount, arg.key, arg.key)
async def make_offer(
    repository: EntityRepository, bid_price: int, listing_key: str, member_key: str
) -> Result[Payload]:
    return await OfferValidator(repository).submit_offer(bid_price, listing_key, member_key)


@registry.operation("closeBidding", arg.key)
async def close_bidding(repository: EntityRepository, listing_key: str) -> Result[Payload]:
    result = await SettlementEngine(repository).close_bidding(listing_key)
    if isinstance(result, Ok):
        return Ok(canonical_dumps(result.value.to_dict()))
    return result
