"""Tests for listing state transitions."""

from __future__ import annotations

import pytest

from carauction.ledger.fsm import ListingEvent, ListingState, is_open, transition


@pytest.mark.parametrize("state", [ListingState.FOR_SALE, ListingState.RESERVE_NOT_MET])
def test_open_states_can_be_sold(state):
    assert transition(state, ListingEvent.CLOSED_RESERVE_MET) is ListingState.SOLD
    assert transition(state, ListingEvent.CLOSED_RESERVE_NOT_MET) is ListingState.RESERVE_NOT_MET
    assert transition(state, ListingEvent.OFFER_RECEIVED) is state
    assert is_open(state)


@pytest.mark.parametrize("event", list(ListingEvent))
def test_sold_is_terminal(event):
    assert not is_open(ListingState.SOLD)
    with pytest.raises(ValueError):
        transition(ListingState.SOLD, event)
