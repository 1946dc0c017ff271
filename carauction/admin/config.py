"""Expose currently loaded server config for debugging."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..config import ServerConfig
from ..contract import OperationRegistry

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_config(request: Request) -> ServerConfig:
    return request.app.state.server_config


def _get_operations(request: Request) -> OperationRegistry:
    return request.app.state.operations


@router.get("/config")
async def config(
    request: Request,
    config: ServerConfig = Depends(_get_config),
    operations: OperationRegistry = Depends(_get_operations),
) -> dict:
    return {
        "version": request.app.version,
        "storage_backend": config.ledger.backend,
        "seed_on_startup": config.seed.on_startup,
        "operations": [
            {"name": name, "arity": operations.get(name).arity} for name in operations.names()
        ],
    }
