"""Admin health endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

_PROBE_KEY = "__health__"


@router.get("/health")
async def health(request: Request) -> dict[str, int | str]:
    start_time = getattr(request.app.state, "start_time", None)
    if start_time:
        uptime = int((datetime.now(timezone.utc) - start_time).total_seconds())
    else:
        uptime = 0
    settings = request.app.state.server_config
    try:
        await request.app.state.storage.get_state(_PROBE_KEY)
        ledger_status = "reachable"
    except Exception as exc:
        logger.warning("ledger probe failed: %s", exc)
        ledger_status = "unreachable"
    return {
        "status": "healthy" if ledger_status == "reachable" else "degraded",
        "uptime_seconds": uptime,
        "version": request.app.version,
        "storage_backend": settings.ledger.backend,
        "ledger": ledger_status,
    }
