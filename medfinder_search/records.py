"""Record types, store contract and store errors shared by the locator and its backends."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class RecordStoreError(Exception):
    """Base class for record-store failures."""


class StoreUnavailable(RecordStoreError):
    """The store could not enumerate its records (network, auth, backend)."""


class ClinicLookupFailed(RecordStoreError):
    """A single clinic point lookup failed."""

    def __init__(self, clinic_id: str, reason: str = "") -> None:
        self.clinic_id = clinic_id
        message = f"Clinic lookup failed for {clinic_id!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


@dataclass(frozen=True)
class Clinic:
    """A clinic that stocks medicines."""

    id: str
    name: str
    address: str
    phone: str
    email: str
    latitude: float
    longitude: float
    operating_hours: str = ""
    verified: bool = False
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "operating_hours": self.operating_hours,
            "verified": self.verified,
            "created_at": _iso(self.created_at),
        }


@dataclass(frozen=True)
class InventoryRecord:
    """One stocked medicine entry belonging to a clinic."""

    id: str
    clinic_id: str
    medicine_name: str
    dosage: str
    quantity: int
    price: float | None = None
    last_updated: datetime | None = None

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"quantity must be an integer, got {self.quantity!r}")
        if self.quantity < 0:
            raise ValueError(f"quantity must be non-negative, got {self.quantity}")
        if self.price is not None and self.price < 0:
            raise ValueError(f"price must be non-negative, got {self.price}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "clinic_id": self.clinic_id,
            "medicine_name": self.medicine_name,
            "dosage": self.dosage,
            "quantity": self.quantity,
            "price": self.price,
            "last_updated": _iso(self.last_updated),
        }


@dataclass(frozen=True)
class MatchResult:
    """A clinic holding stock of the searched medicine, with its distance to the user."""

    clinic: Clinic
    inventory: InventoryRecord
    distance_km: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "clinic": self.clinic.to_dict(),
            "inventory": self.inventory.to_dict(),
            "distance_km": round(self.distance_km, 4) if self.distance_km is not None else None,
        }


# ---------------------------------------------------------------------------
# Store contract
# ---------------------------------------------------------------------------


class RecordStore(Protocol):
    """What the locator needs from a persistence backend."""

    def list_inventory(self) -> list[InventoryRecord]:
        """Full inventory snapshot. Raises StoreUnavailable on failure."""
        ...

    def get_clinic(self, clinic_id: str) -> Clinic | None:
        """Point lookup. None when the clinic does not exist."""
        ...
