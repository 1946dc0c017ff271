"""Typed ledger records and their byte encoding.

Every stored value is a canonical JSON object tagged with ``docType``. Offers
are embedded in their listing and carry no tag. Decoding validates against the
JSON Schemas in ``carauction/schemas`` so unknown, missing or mistyped fields
never reach the auction logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Type, TypeVar, Union

import orjson
from jsonschema import ValidationError

from ..transport.canonical_json import canonical_dumps, canonical_loads
from ..validation.validator import get_schema_registry
from .fsm import ListingState


class MalformedRecordError(ValueError):
    """Raised when stored bytes do not decode into the expected record kind."""


@dataclass(frozen=True)
class Offer:
    bid_price: int
    listing: str
    member: str

    def to_dict(self) -> dict[str, Any]:
        return {"bidPrice": self.bid_price, "listing": self.listing, "member": self.member}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Offer":
        return cls(bid_price=data["bidPrice"], listing=data["listing"], member=data["member"])


@dataclass
class Member:
    DOC_TYPE: ClassVar[str] = "member"
    SCHEMA: ClassVar[str] = "member"

    first_name: str
    last_name: str
    balance: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "docType": self.DOC_TYPE,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "balance": self.balance,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Member":
        return cls(
            first_name=data["firstName"],
            last_name=data["lastName"],
            balance=data["balance"],
        )


@dataclass
class Vehicle:
    DOC_TYPE: ClassVar[str] = "vehicle"
    SCHEMA: ClassVar[str] = "vehicle"

    owner: str

    def to_dict(self) -> dict[str, Any]:
        return {"docType": self.DOC_TYPE, "owner": self.owner}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vehicle":
        return cls(owner=data["owner"])


@dataclass
class VehicleListing:
    DOC_TYPE: ClassVar[str] = "vehicleListing"
    SCHEMA: ClassVar[str] = "vehicle_listing"

    reserve_price: int
    description: str
    listing_state: ListingState
    vehicle: str
    offers: list[Offer] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "docType": self.DOC_TYPE,
            "reservePrice": self.reserve_price,
            "description": self.description,
            "listingState": self.listing_state.value,
            "offers": [offer.to_dict() for offer in self.offers],
            "vehicle": self.vehicle,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VehicleListing":
        return cls(
            reserve_price=data["reservePrice"],
            description=data["description"],
            listing_state=ListingState(data["listingState"]),
            vehicle=data["vehicle"],
            offers=[Offer.from_dict(item) for item in data["offers"] or []],
        )


Record = Union[Member, Vehicle, VehicleListing]
R = TypeVar("R", Member, Vehicle, VehicleListing)

RECORD_TYPES: dict[str, Type[Record]] = {
    Member.DOC_TYPE: Member,
    Vehicle.DOC_TYPE: Vehicle,
    VehicleListing.DOC_TYPE: VehicleListing,
}


def encode_record(record: Record) -> bytes:
    try:
        return canonical_dumps(record.to_dict())
    except orjson.JSONEncodeError as exc:
        raise MalformedRecordError(f"{record.DOC_TYPE}: {exc}") from exc


def decode_record(record_type: Type[R], raw: bytes) -> R:
    try:
        data = canonical_loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedRecordError(f"{record_type.DOC_TYPE} is not valid JSON") from exc
    if not isinstance(data, dict) or data.get("docType") != record_type.DOC_TYPE:
        raise MalformedRecordError(f"stored value is not a {record_type.DOC_TYPE} record")
    try:
        get_schema_registry().validate(record_type.SCHEMA, data)
    except ValidationError as exc:
        raise MalformedRecordError(f"{record_type.DOC_TYPE}: {exc.message}") from exc
    return record_type.from_dict(data)


def decode_any(raw: bytes) -> Record:
    """Decode a value whose kind is only known from its ``docType`` tag."""
    try:
        data = canonical_loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedRecordError("stored value is not valid JSON") from exc
    doc_type = data.get("docType") if isinstance(data, dict) else None
    record_type = RECORD_TYPES.get(doc_type)
    if record_type is None:
        raise MalformedRecordError(f"unknown docType {doc_type!r}")
    return decode_record(record_type, raw)


def decode_offers(payload: str) -> list[Offer]:
    """Parse the ``offers`` argument of createVehicleListing.

    An empty string means no offers; anything else must be a JSON array of
    offer objects.
    """
    if not payload.strip():
        return []
    try:
        data = canonical_loads(payload)
    except orjson.JSONDecodeError as exc:
        raise MalformedRecordError("offers must be a JSON array") from exc
    try:
        get_schema_registry().validate("offer_list", data)
    except ValidationError as exc:
        raise MalformedRecordError(f"offers: {exc.message}") from exc
    return [Offer.from_dict(item) for item in data]
