"""Parsers applied to string arguments before a handler runs."""

from __future__ import annotations

import re

from ..ledger.fsm import ListingState
from ..ledger.records import MalformedRecordError, Offer, decode_offers
from ..result import AuctionError, ErrorKind

_AMOUNT_PATTERN = re.compile(r"[0-9]+")
# Largest integer every JSON consumer of the ledger decodes exactly.
MAX_AMOUNT = 2**53 - 1


class ArgumentError(ValueError):
    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.error = AuctionError(kind, message)


def text(value: str) -> str:
    return value


def key(value: str) -> str:
    if not value:
        raise ArgumentError(ErrorKind.INVALID_ARGUMENT, "key must not be empty")
    return value


def amount(value: str) -> int:
    """Parse a non-negative base-10 integer, rejecting anything else."""
    if not _AMOUNT_PATTERN.fullmatch(value):
        raise ArgumentError(
            ErrorKind.MALFORMED_NUMERIC_INPUT, f"{value!r} is not a non-negative integer"
        )
    parsed = int(value)
    if parsed > MAX_AMOUNT:
        raise ArgumentError(ErrorKind.MALFORMED_NUMERIC_INPUT, f"{value} exceeds {MAX_AMOUNT}")
    return parsed


def listing_state(value: str) -> ListingState:
    try:
        return ListingState(value)
    except ValueError as exc:
        allowed = ", ".join(state.value for state in ListingState)
        raise ArgumentError(
            ErrorKind.INVALID_ARGUMENT, f"listingState must be one of {allowed}, got {value!r}"
        ) from exc


def offers(value: str) -> list[Offer]:
    try:
        return decode_offers(value)
    except MalformedRecordError as exc:
        raise ArgumentError(ErrorKind.INVALID_ARGUMENT, str(exc)) from exc
