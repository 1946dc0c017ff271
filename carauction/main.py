from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import orjson
from fastapi import Body, Depends, FastAPI, HTTPException, Request

from .admin import config as admin_config
from .admin import health as admin_health
from .admin import stats as admin_stats
from .config import ServerConfig, get_server_config
from .contract import OperationRegistry, registry
from .result import Err, ErrorKind, Result
from .storage import LedgerStorage, build_storage
from .validation.validator import get_schema_registry

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.ARGUMENT_COUNT_MISMATCH: 400,
    ErrorKind.UNKNOWN_OPERATION: 404,
    ErrorKind.INVALID_ARGUMENT: 422,
    ErrorKind.MALFORMED_NUMERIC_INPUT: 422,
    ErrorKind.MALFORMED_RECORD: 500,
    ErrorKind.RECORD_NOT_FOUND: 404,
    ErrorKind.INSUFFICIENT_BALANCE: 422,
    ErrorKind.SELF_BID_NOT_ALLOWED: 422,
    ErrorKind.LISTING_CLOSED: 409,
    ErrorKind.NO_OFFERS_EXIST: 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    server_config = get_server_config()
    # Fail at startup rather than on the first decode if a schema is broken.
    get_schema_registry()
    storage = build_storage(server_config)

    app.state.server_config = server_config
    app.state.storage = storage
    app.state.operations = registry
    app.state.start_time = datetime.now(timezone.utc)

    if server_config.seed.on_startup:
        result = await registry.invoke(storage, "initLedger", [])
        if isinstance(result, Err):
            raise RuntimeError(f"seeding ledger failed: {result.error}")
        logger.info("ledger seeded on startup")

    yield


app = FastAPI(
    title="Car Auction Ledger",
    version="1.0.0",
    docs_url="/docs",
    lifespan=lifespan,
)

app.include_router(admin_health.router)
app.include_router(admin_stats.router)
app.include_router(admin_config.router)


# Dependency helpers ---------------------------------------------------------


def get_server_settings(request: Request) -> ServerConfig:
    return request.app.state.server_config


def get_storage_backend(request: Request) -> LedgerStorage:
    return request.app.state.storage


def get_operations(request: Request) -> OperationRegistry:
    return request.app.state.operations


# Routes ---------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root(settings: ServerConfig = Depends(get_server_settings)) -> dict[str, Any]:
    return {
        "service": "carauction",
        "version": app.version,
        "ledger": {"backend": settings.ledger.backend},
    }


@app.get("/ping", tags=["meta"])
async def ping() -> dict[str, Any]:
    return {"status": "ok", "version": app.version}


@app.post("/invoke", tags=["ledger"])
async def invoke(
    payload: dict[str, Any] = Body(...),
    storage: LedgerStorage = Depends(get_storage_backend),
    operations: OperationRegistry = Depends(get_operations),
) -> dict[str, Any]:
    fcn = payload.get("fcn")
    if not isinstance(fcn, str) or not fcn:
        raise HTTPException(status_code=422, detail="fcn is required")
    args = payload.get("args", [])
    if not isinstance(args, list) or not all(isinstance(arg, str) for arg in args):
        raise HTTPException(status_code=422, detail="args must be a list of strings")
    result = await _run(operations, storage, fcn, args)
    return format_result(result)


@app.get("/query/{key}", tags=["ledger"])
async def query(
    key: str,
    storage: LedgerStorage = Depends(get_storage_backend),
    operations: OperationRegistry = Depends(get_operations),
) -> dict[str, Any]:
    result = await _run(operations, storage, "query", [key])
    return format_result(result)


async def _run(
    operations: OperationRegistry, storage: LedgerStorage, fcn: str, args: list[str]
) -> Result[bytes | None]:
    try:
        return await operations.invoke(storage, fcn, args)
    except Exception as exc:
        logger.error("invocation %s failed: %s", fcn, exc, exc_info=True)
        raise HTTPException(status_code=500, detail=f"ledger failure: {exc}") from exc


def format_result(result: Result[bytes | None]) -> dict[str, Any]:
    if isinstance(result, Err):
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error.kind, 400),
            detail={"kind": result.error.kind.value, "message": result.error.message},
        )
    payload = result.value
    return {
        "status": "ok",
        "payload": orjson.loads(payload) if payload else None,
    }
