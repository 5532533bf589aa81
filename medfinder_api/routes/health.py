"""Health check endpoint."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from medfinder_search import StoreUnavailable

from .. import helpers

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/health")
async def health(request: Request):
    """Health check — reports store mode, record counts, version, uptime. Always open."""
    store = helpers.current_store()
    mode = getattr(store, "mode", "uninitialized")
    clinic_count = inventory_count = 0
    store_ok = False

    if store is not None:
        try:
            clinic_count = len(store.list_clinics())
            inventory_count = len(store.list_inventory())
            store_ok = True
        except StoreUnavailable as e:
            logger.warning("Health check: store unavailable: %s", e)

    server_started_at = request.app.state.server_started_at
    uptime_seconds = round((datetime.now(timezone.utc) - server_started_at).total_seconds())

    return JSONResponse(
        status_code=200 if store_ok else 503,
        content={
            "status": "healthy" if store_ok else "degraded",
            "mode": mode,
            "clinic_count": clinic_count,
            "inventory_count": inventory_count,
            "version": request.app.version,
            "started_at": helpers.iso(server_started_at),
            "uptime_seconds": uptime_seconds,
        },
    )
