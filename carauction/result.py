"""Result type returned by invocation handlers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    ARGUMENT_COUNT_MISMATCH = "ArgumentCountMismatch"
    UNKNOWN_OPERATION = "UnknownOperation"
    INVALID_ARGUMENT = "InvalidArgument"
    MALFORMED_NUMERIC_INPUT = "MalformedNumericInput"
    MALFORMED_RECORD = "MalformedRecord"
    RECORD_NOT_FOUND = "RecordNotFound"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    SELF_BID_NOT_ALLOWED = "SelfBidNotAllowed"
    LISTING_CLOSED = "ListingClosed"
    NO_OFFERS_EXIST = "NoOffersExist"


@dataclass(frozen=True)
class AuctionError:
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: AuctionError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def fail(kind: ErrorKind, message: str) -> Err:
    return Err(AuctionError(kind, message))
