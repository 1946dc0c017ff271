"""Winner selection helpers."""

from __future__ import annotations

from typing import Iterable, Optional

from ..ledger.records import Offer


def select_winner(offers: Iterable[Offer]) -> Optional[Offer]:
    """Highest bid wins; among equal bids the earliest-submitted one does.

    ``max`` keeps the first maximal element it meets, so iteration order
    (arrival order) decides ties.
    """
    return max(offers, key=lambda offer: offer.bid_price, default=None)
