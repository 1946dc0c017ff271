"""Seed the configured ledger backend with the demo members, vehicle and listing."""

import asyncio
import logging

from carauction.config import get_server_config
from carauction.contract import registry
from carauction.result import Err
from carauction.storage import build_storage


async def seed() -> None:
    config = get_server_config()
    storage = build_storage(config)
    result = await registry.invoke(storage, "initLedger", [])
    if isinstance(result, Err):
        raise SystemExit(f"seeding failed: {result.error}")
    logging.getLogger(__name__).info("seeded %s ledger", config.ledger.backend)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
