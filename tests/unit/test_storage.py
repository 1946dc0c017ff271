"""Tests for the storage factory, in-memory backend and ledger transaction."""

from __future__ import annotations

import pytest

from carauction.config import LedgerConfig, SeedConfig, ServerConfig, get_server_config
from carauction.ledger.transaction import LedgerTransaction
from carauction.storage import build_storage
from carauction.storage.in_memory import InMemoryStorage


def _config(backend: str) -> ServerConfig:
    return ServerConfig(
        listen={},
        ledger=LedgerConfig(backend=backend, options={}),
        seed=SeedConfig(on_startup=False),
    )


def test_build_in_memory_storage():
    assert isinstance(build_storage(_config("in_memory")), InMemoryStorage)


def test_unknown_backend_rejected():
    with pytest.raises(ValueError, match="unknown storage backend"):
        build_storage(_config("tape"))


def test_server_config_from_env(tmp_path, monkeypatch):
    path = tmp_path / "server.yaml"
    path.write_text(
        "ledger:\n"
        "  backend: redis\n"
        "  options:\n"
        "    url: redis://cache:6379/0\n"
        "seed:\n"
        "  on_startup: true\n"
    )
    monkeypatch.setenv("CARAUCTION_CONFIG_PATH", str(path))
    get_server_config.cache_clear()
    try:
        config = get_server_config()
    finally:
        get_server_config.cache_clear()
    assert config.ledger.backend == "redis"
    assert config.ledger.options == {"url": "redis://cache:6379/0"}
    assert config.seed.on_startup is True


class TestInMemoryStorage:
    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self):
        assert await InMemoryStorage().get_state("absent") is None

    @pytest.mark.asyncio
    async def test_invalid_batch_applies_nothing(self):
        storage = InMemoryStorage()
        with pytest.raises(TypeError):
            await storage.put_states({"a": b"1", "b": "not bytes"})
        assert await storage.list_states() == {}


class TestLedgerTransaction:
    @pytest.mark.asyncio
    async def test_writes_are_buffered_until_commit(self):
        storage = InMemoryStorage()
        tx = LedgerTransaction(storage)
        tx.put_state("a", b"1")
        tx.put_state("b", b"2")

        assert await storage.get_state("a") is None
        assert await tx.get_state("a") is None

        await tx.commit()
        assert await storage.list_states() == {"a": b"1", "b": b"2"}

    @pytest.mark.asyncio
    async def test_commit_only_once(self):
        tx = LedgerTransaction(InMemoryStorage())
        await tx.commit()
        with pytest.raises(RuntimeError):
            await tx.commit()
        with pytest.raises(RuntimeError):
            tx.put_state("a", b"1")

    @pytest.mark.asyncio
    async def test_empty_value_reads_as_missing(self):
        storage = InMemoryStorage()
        await storage.put_states({"a": b""})
        assert await LedgerTransaction(storage).get_state("a") is None
