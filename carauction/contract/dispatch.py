"""Operation registry mapping invocation names to typed handlers."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from ..ledger.records import MalformedRecordError
from ..ledger.repository import EntityRepository
from ..ledger.transaction import LedgerTransaction
from ..result import Err, ErrorKind, Result, fail
from ..storage import LedgerStorage
from .arguments import ArgumentError

logger = logging.getLogger(__name__)

Payload = bytes | None
Handler = Callable[..., Awaitable[Result[Payload]]]
Parser = Callable[[str], Any]


@dataclass(frozen=True)
class Operation:
    name: str
    handler: Handler
    parsers: tuple[Parser, ...]

    @property
    def arity(self) -> int:
        return len(self.parsers)

    def parse(self, args: Sequence[str]) -> list[Any]:
        return [parser(arg) for parser, arg in zip(self.parsers, args)]


class OperationRegistry:
    def __init__(self) -> None:
        self._operations: dict[str, Operation] = {}

    def operation(self, name: str, *parsers: Parser) -> Callable[[Handler], Handler]:
        """Register a handler taking the repository followed by one value per parser."""

        def decorator(handler: Handler) -> Handler:
            params = list(inspect.signature(handler).parameters)
            if len(params) != len(parsers) + 1:
                raise TypeError(
                    f"{name}: handler takes {len(params) - 1} arguments "
                    f"but {len(parsers)} parsers were declared"
                )
            if name in self._operations:
                raise ValueError(f"operation {name} already registered")
            self._operations[name] = Operation(name, handler, tuple(parsers))
            return handler

        return decorator

    def get(self, name: str) -> Operation | None:
        return self._operations.get(name)

    def names(self) -> list[str]:
        return sorted(self._operations)

    async def invoke(
        self, storage: LedgerStorage, name: str, args: Sequence[str]
    ) -> Result[Payload]:
        """Run one operation as a single all-or-nothing ledger transaction."""
        operation = self._operations.get(name)
        if operation is None:
            return self._rejected(
                name, fail(ErrorKind.UNKNOWN_OPERATION, f"received unknown function {name}")
            )
        if len(args) != operation.arity:
            return self._rejected(
                name,
                fail(
                    ErrorKind.ARGUMENT_COUNT_MISMATCH,
                    f"incorrect number of arguments, expecting {operation.arity}",
                ),
            )
        try:
            parsed = operation.parse(args)
        except ArgumentError as exc:
            return self._rejected(name, Err(exc.error))

        tx = LedgerTransaction(storage)
        try:
            result = await operation.handler(EntityRepository(tx), *parsed)
        except MalformedRecordError as exc:
            return self._rejected(name, fail(ErrorKind.MALFORMED_RECORD, str(exc)))
        if isinstance(result, Err):
            return self._rejected(name, result)
        await tx.commit()
        logger.info("%s committed %d writes", name, len(tx.pending_keys))
        return result

    @staticmethod
    def _rejected(name: str, result: Err) -> Err:
        logger.warning("%s rejected: %s", name, result.error)
        return result
