"""Medicine search endpoints (nearby ranked search, unranked search)."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from medfinder_search import (
    StoreUnavailable,
    find_nearby_medicine,
    search_medicine_in_clinics,
)

from ..helpers import DEFAULT_RADIUS_KM, MAX_RADIUS_KM, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_query(q: str) -> str:
    if not q.strip():
        raise HTTPException(status_code=400, detail="Please enter a medicine name to search")
    return q.strip()


@router.get("/api/medicines/nearby")
async def nearby_medicine(
    q: str = Query(..., description="Medicine name (case-insensitive substring)"),
    lat: float = Query(..., allow_inf_nan=False, description="User latitude"),
    lon: float = Query(..., allow_inf_nan=False, description="User longitude"),
    radius_km: float = Query(
        DEFAULT_RADIUS_KM, ge=0, le=MAX_RADIUS_KM, allow_inf_nan=False, description="Search radius in km"
    ),
) -> dict[str, Any]:
    """Clinics within radius_km that have the medicine in stock, nearest first."""
    query = _require_query(q)
    store = get_store()

    try:
        matches = find_nearby_medicine(store, query, lat, lon, radius_km)
    except StoreUnavailable as e:
        logger.error("Nearby search failed: %s", e)
        raise HTTPException(status_code=503, detail=f"Record store unavailable: {e}")
    except Exception as e:
        logger.exception("Nearby search failed")
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "query": query,
        "center": {"latitude": lat, "longitude": lon},
        "radius_km": radius_km,
        "count": len(matches),
        "data": [m.to_dict() for m in matches],
    }


@router.get("/api/medicines/search")
async def search_medicine(
    q: str = Query(..., description="Medicine name (case-insensitive substring)"),
) -> dict[str, Any]:
    """All in-stock matches regardless of distance, in store order."""
    query = _require_query(q)
    store = get_store()

    try:
        matches = search_medicine_in_clinics(store, query)
    except StoreUnavailable as e:
        logger.error("Medicine search failed: %s", e)
        raise HTTPException(status_code=503, detail=f"Record store unavailable: {e}")
    except Exception as e:
        logger.exception("Medicine search failed")
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "query": query,
        "count": len(matches),
        "data": [m.to_dict() for m in matches],
    }
