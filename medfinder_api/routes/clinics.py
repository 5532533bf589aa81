"""Clinic management endpoints and per-clinic inventory."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from medfinder_search import StoreUnavailable

from ..helpers import get_store
from ..models import ClinicCreate, ClinicUpdate, InventoryCreate

logger = logging.getLogger(__name__)

router = APIRouter()


def _unavailable(e: StoreUnavailable) -> HTTPException:
    logger.error("Record store error: %s", e)
    return HTTPException(status_code=503, detail=f"Record store unavailable: {e}")


@router.get("/api/clinics")
async def list_clinics() -> dict[str, Any]:
    try:
        clinics = get_store().list_clinics()
    except StoreUnavailable as e:
        raise _unavailable(e)
    return {"count": len(clinics), "data": [c.to_dict() for c in clinics]}


@router.post("/api/clinics", status_code=201)
async def create_clinic(req: ClinicCreate) -> dict[str, Any]:
    """Register a new clinic.  New clinics start unverified unless stated."""
    try:
        clinic = get_store().create_clinic(req.model_dump())
    except StoreUnavailable as e:
        raise _unavailable(e)
    logger.info("Created clinic %s (%s)", clinic.id, clinic.name)
    return {"data": clinic.to_dict()}


@router.get("/api/clinics/{clinic_id}")
async def get_clinic(clinic_id: str) -> dict[str, Any]:
    try:
        clinic = get_store().get_clinic(clinic_id)
    except StoreUnavailable as e:
        raise _unavailable(e)
    if clinic is None:
        raise HTTPException(status_code=404, detail="Clinic not found")
    return {"data": clinic.to_dict()}


@router.patch("/api/clinics/{clinic_id}")
async def update_clinic(clinic_id: str, req: ClinicUpdate) -> dict[str, Any]:
    updates = {k: v for k, v in req.model_dump(exclude_unset=True).items() if v is not None}
    try:
        clinic = get_store().update_clinic(clinic_id, updates)
    except KeyError:
        raise HTTPException(status_code=404, detail="Clinic not found")
    except StoreUnavailable as e:
        raise _unavailable(e)
    return {"data": clinic.to_dict()}


@router.get("/api/clinics/{clinic_id}/inventory")
async def list_clinic_inventory(clinic_id: str) -> dict[str, Any]:
    """Inventory rows of one clinic, including out-of-stock ones."""
    store = get_store()
    try:
        if store.get_clinic(clinic_id) is None:
            raise HTTPException(status_code=404, detail="Clinic not found")
        rows = store.list_inventory(clinic_id)
    except StoreUnavailable as e:
        raise _unavailable(e)
    return {"clinic_id": clinic_id, "count": len(rows), "data": [r.to_dict() for r in rows]}


@router.post("/api/clinics/{clinic_id}/inventory", status_code=201)
async def add_inventory_item(clinic_id: str, req: InventoryCreate) -> dict[str, Any]:
    """Add a medicine to a clinic's inventory."""
    store = get_store()
    try:
        if store.get_clinic(clinic_id) is None:
            raise HTTPException(status_code=404, detail="Clinic not found")
        item = store.add_inventory_item({"clinic_id": clinic_id, **req.model_dump()})
    except StoreUnavailable as e:
        raise _unavailable(e)
    logger.info(
        "Added %s %s (qty %d) to clinic %s", item.medicine_name, item.dosage, item.quantity, clinic_id
    )
    return {"data": item.to_dict()}
