"""Inventory item update/delete endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Response

from medfinder_search import StoreUnavailable

from ..helpers import get_store
from ..models import InventoryUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/inventory/{item_id}")
async def get_inventory_item(item_id: str) -> dict[str, Any]:
    try:
        item = get_store().get_inventory_item(item_id)
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Record store unavailable: {e}")
    if item is None:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return {"data": item.to_dict()}


@router.patch("/api/inventory/{item_id}")
async def update_inventory_item(item_id: str, req: InventoryUpdate) -> dict[str, Any]:
    """Partial update.  Always refreshes last_updated; price may be cleared with null."""
    updates = {
        k: v
        for k, v in req.model_dump(exclude_unset=True).items()
        if v is not None or k == "price"
    }
    try:
        item = get_store().update_inventory_item(item_id, updates)
    except KeyError:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Record store unavailable: {e}")
    return {"data": item.to_dict()}


@router.delete("/api/inventory/{item_id}", status_code=204)
async def delete_inventory_item(item_id: str) -> Response:
    try:
        get_store().delete_inventory_item(item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Record store unavailable: {e}")
    logger.info("Deleted inventory item %s", item_id)
    return Response(status_code=204)
