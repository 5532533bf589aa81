"""Shared fixtures: an in-memory record store and record factories."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from medfinder_search import Clinic, InventoryRecord

_TS = datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)


def make_clinic(clinic_id: str, latitude: float, longitude: float, **kwargs) -> Clinic:
    fields = {
        "name": f"Clinic {clinic_id}",
        "address": f"{clinic_id} Main Street",
        "phone": "+10000000000",
        "email": f"{clinic_id.lower()}@clinic.example",
        "operating_hours": "Mon-Fri 08:00-18:00",
        "verified": True,
        "created_at": _TS,
    }
    fields.update(kwargs)
    return Clinic(id=clinic_id, latitude=latitude, longitude=longitude, **fields)


def make_item(item_id: str, clinic_id: str, medicine_name: str, quantity: int, **kwargs) -> InventoryRecord:
    fields = {"dosage": "500mg", "price": 10.0, "last_updated": _TS}
    fields.update(kwargs)
    return InventoryRecord(
        id=item_id,
        clinic_id=clinic_id,
        medicine_name=medicine_name,
        quantity=quantity,
        **fields,
    )


class FakeStore:
    """Minimal record store with switchable failures and a lookup log."""

    def __init__(self, clinics=(), inventory=()):
        self.clinics = {c.id: c for c in clinics}
        self.inventory = list(inventory)
        self.list_error: Exception | None = None
        self.lookup_errors: dict[str, Exception] = {}
        self.lookups: list[str] = []

    def list_inventory(self):
        if self.list_error is not None:
            raise self.list_error
        return list(self.inventory)

    def get_clinic(self, clinic_id):
        self.lookups.append(clinic_id)
        if clinic_id in self.lookup_errors:
            raise self.lookup_errors[clinic_id]
        return self.clinics.get(clinic_id)


@pytest.fixture()
def fake_store():
    """Clinics A (0,0), B (0,0.2) ~22 km, C (0,1) ~111 km."""
    clinics = [
        make_clinic("A", 0.0, 0.0),
        make_clinic("B", 0.0, 0.2),
        make_clinic("C", 0.0, 1.0),
    ]
    inventory = [
        make_item("i1", "B", "Aspirin", 5),
        make_item("i2", "A", "Aspirin Forte", 12),
        make_item("i3", "C", "Aspirin", 30),
        make_item("i4", "A", "Ibuprofen", 7),
        make_item("i5", "B", "aspirin", 0),
    ]
    return FakeStore(clinics, inventory)
