"""Shared configuration, row converters and active-store state for the Clinic Medicine Finder API."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fastapi import HTTPException

from medfinder_search import Clinic, InventoryRecord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("MEDFINDER_DATA_DIR", str(ROOT / "sample-data")))

DEFAULT_RADIUS_KM = float(os.environ.get("MEDFINDER_DEFAULT_RADIUS_KM", "50"))
MAX_RADIUS_KM = float(os.environ.get("MEDFINDER_MAX_RADIUS_KM", "500"))

# ---------------------------------------------------------------------------
# Active record store (set at startup: PostgreSQL, or JSON fallback)
# ---------------------------------------------------------------------------

_STORE = None


def set_store(store) -> None:
    global _STORE  # noqa: PLW0603
    _STORE = store


def current_store():
    """Return the active record store, or None before startup has picked one."""
    return _STORE


def get_store():
    """Return the active record store, or raise 503 if startup never picked one."""
    if _STORE is None:
        raise HTTPException(status_code=503, detail="Record store not initialized")
    return _STORE


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso(dt) -> str | None:
    """Convert a datetime to ISO string."""
    if dt is None:
        return None
    if isinstance(dt, datetime):
        return dt.isoformat()
    return str(dt)


def parse_ts(value) -> datetime | None:
    """Parse an ISO 8601 string (or pass a datetime through).  Unparseable → None."""
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Ignoring unparseable timestamp %r", value)
        return None


# ---------------------------------------------------------------------------
# Row converters
# ---------------------------------------------------------------------------
#
# Rows come either from PostgreSQL (RealDictRow, snake_case, datetimes) or
# from JSON exports of the mobile backends (camelCase keys, ISO strings).


def _pick(row: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return default


def _as_bool(value) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"verified must be a boolean, got {value!r}")
    return value


def row_to_clinic(row: dict) -> Clinic:
    """Build a Clinic from a DB row or JSON document."""
    return Clinic(
        id=str(_pick(row, "id", "$id")),
        name=row.get("name") or "",
        address=row.get("address") or "",
        phone=row.get("phone") or "",
        email=row.get("email") or "",
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        operating_hours=_pick(row, "operating_hours", "operatingHours", default=""),
        verified=_as_bool(row.get("verified", False)),
        created_at=parse_ts(_pick(row, "created_at", "createdAt")),
    )


def row_to_inventory(row: dict) -> InventoryRecord:
    """Build an InventoryRecord from a DB row or JSON document."""
    price = row.get("price")
    return InventoryRecord(
        id=str(_pick(row, "id", "$id")),
        clinic_id=str(_pick(row, "clinic_id", "clinicId")),
        medicine_name=_pick(row, "medicine_name", "medicineName", default=""),
        dosage=row.get("dosage") or "",
        quantity=row["quantity"],
        price=float(price) if price is not None else None,
        last_updated=parse_ts(_pick(row, "last_updated", "lastUpdated")),
    )
