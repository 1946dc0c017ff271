"""Named ledger operations and their dispatch."""

from .handlers import registry
from .dispatch import Operation, OperationRegistry

__all__ = ["Operation", "OperationRegistry", "registry"]
