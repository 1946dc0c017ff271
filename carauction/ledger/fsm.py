"""Listing finite state machine."""

from __future__ import annotations

from enum import Enum


class ListingState(str, Enum):
    FOR_SALE = "FOR_SALE"
    RESERVE_NOT_MET = "RESERVE_NOT_MET"
    SOLD = "SOLD"


class ListingEvent(str, Enum):
    OFFER_RECEIVED = "offer_received"
    CLOSED_RESERVE_MET = "closed_reserve_met"
    CLOSED_RESERVE_NOT_MET = "closed_reserve_not_met"


_TRANSITIONS = {
    (ListingState.FOR_SALE, ListingEvent.OFFER_RECEIVED): ListingState.FOR_SALE,
    (ListingState.RESERVE_NOT_MET, ListingEvent.OFFER_RECEIVED): ListingState.RESERVE_NOT_MET,
    (ListingState.FOR_SALE, ListingEvent.CLOSED_RESERVE_MET): ListingState.SOLD,
    (ListingState.RESERVE_NOT_MET, ListingEvent.CLOSED_RESERVE_MET): ListingState.SOLD,
    (ListingState.FOR_SALE, ListingEvent.CLOSED_RESERVE_NOT_MET): ListingState.RESERVE_NOT_MET,
    (
        ListingState.RESERVE_NOT_MET,
        ListingEvent.CLOSED_RESERVE_NOT_MET,
    ): ListingState.RESERVE_NOT_MET,
}


def transition(current: ListingState, event: ListingEvent) -> ListingState:
    try:
        return _TRANSITIONS[(current, event)]
    except KeyError as exc:
        raise ValueError(f"invalid transition from {current.value} via {event.value}") from exc


def is_open(state: ListingState) -> bool:
    return state is not ListingState.SOLD
