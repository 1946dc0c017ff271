"""Canonical JSON encoding for ledger values."""

from __future__ import annotations

from typing import Any, Union

import orjson

_ORJSON_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_STRICT_INTEGER


JsonType = Union[str, int, float, bool, None, list["JsonType"], dict[str, "JsonType"]]


def canonical_dumps(payload: Any) -> bytes:
    """Return canonical JSON bytes with sorted keys and stable formatting.

    Integers outside the 53-bit range are rejected so every peer reading the
    ledger decodes balances to the same value.
    """
    return orjson.dumps(payload, option=_ORJSON_OPTIONS)


def canonical_loads(raw: bytes | bytearray | str) -> Any:
    return orjson.loads(raw)
