"""Configuration helpers for the auction ledger service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

_DEFAULT_SERVER_CONFIG = Path(__file__).resolve().parent / "server.yaml"


@dataclass(frozen=True)
class LedgerConfig:
    backend: str
    options: Mapping[str, Any]


@dataclass(frozen=True)
class SeedConfig:
    on_startup: bool


@dataclass(frozen=True)
class ServerConfig:
    listen: Mapping[str, Any]
    ledger: LedgerConfig
    seed: SeedConfig


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    return yaml.safe_load(path.read_text()) or {}


@lru_cache(maxsize=1)
def get_server_config() -> ServerConfig:
    path = Path(os.getenv("CARAUCTION_CONFIG_PATH", _DEFAULT_SERVER_CONFIG))
    data = _load_yaml(path)
    ledger = data.get("ledger", {})
    options = dict(ledger.get("options") or {})
    seed = data.get("seed", {})
    return ServerConfig(
        listen=data.get("listen", {}),
        ledger=LedgerConfig(
            backend=str(ledger.get("backend", "in_memory")),
            options=options,
        ),
        seed=SeedConfig(on_startup=bool(seed.get("on_startup", False))),
    )
