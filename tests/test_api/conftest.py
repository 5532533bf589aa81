"""Shared fixtures for the API test suite.

All tests run against a JsonRecordStore in a temporary directory.
db.init_pool() is patched to report no database, and the store is
installed directly instead of going through the startup event.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from starlette.testclient import TestClient

# ---------------------------------------------------------------------------
# Sample records (the JSON store's on-disk shape)
# ---------------------------------------------------------------------------

SAMPLE_CLINICS: list[dict] = [
    {
        "id": "clinic-a",
        "name": "Clinic A",
        "address": "1 Equator Way",
        "phone": "+254700000001",
        "email": "a@clinic.example",
        "latitude": 0.0,
        "longitude": 0.0,
        "operating_hours": "Mon-Fri 08:00-18:00",
        "verified": True,
        "created_at": "2026-09-01T09:00:00+00:00",
    },
    {
        "id": "clinic-b",
        "name": "Clinic B",
        "address": "2 Meridian Rd",
        "phone": "+254700000002",
        "email": "",
        "latitude": 0.0,
        "longitude": 0.3,
        "operating_hours": "24 hours",
        "verified": False,
        "created_at": "2026-09-02T09:00:00+00:00",
    },
    {
        "id": "clinic-c",
        "name": "Clinic C",
        "address": "3 Far Away St",
        "phone": "+254700000003",
        "email": "c@clinic.example",
        "latitude": 0.0,
        "longitude": 1.0,
        "operating_hours": "",
        "verified": True,
        "created_at": "2026-09-03T09:00:00+00:00",
    },
]

SAMPLE_INVENTORY: list[dict] = [
    {"id": "inv-1", "clinic_id": "clinic-b", "medicine_name": "Paracetamol", "dosage": "500mg",
     "quantity": 10, "price": 50.0, "last_updated": "2026-10-01T08:00:00+00:00"},
    {"id": "inv-2", "clinic_id": "clinic-a", "medicine_name": "Paracetamol 500mg", "dosage": "500mg",
     "quantity": 20, "price": 45.0, "last_updated": "2026-10-01T08:00:00+00:00"},
    {"id": "inv-3", "clinic_id": "clinic-c", "medicine_name": "paracetamol", "dosage": "650mg",
     "quantity": 5, "price": None, "last_updated": "2026-10-01T08:00:00+00:00"},
    {"id": "inv-4", "clinic_id": "clinic-a", "medicine_name": "Amoxicillin", "dosage": "250mg",
     "quantity": 0, "price": 180.0, "last_updated": "2026-10-01T08:00:00+00:00"},
    {"id": "inv-5", "clinic_id": "deleted-clinic", "medicine_name": "Paracetamol", "dosage": "500mg",
     "quantity": 3, "price": 40.0, "last_updated": "2026-10-01T08:00:00+00:00"},
]


# ---------------------------------------------------------------------------
# App fixture — JSON store in tmp_path, DB patched away
# ---------------------------------------------------------------------------


@pytest.fixture()
def store(tmp_path):
    from medfinder_api.stores import JsonRecordStore

    (tmp_path / "clinics.json").write_text(json.dumps(SAMPLE_CLINICS), encoding="utf-8")
    (tmp_path / "inventory.json").write_text(json.dumps(SAMPLE_INVENTORY), encoding="utf-8")
    return JsonRecordStore(tmp_path).load()


@pytest.fixture()
def app(store):
    """FastAPI app serving the temporary JSON store (no DB)."""
    with (
        patch("medfinder_api.db.init_pool", return_value=False),
        patch("medfinder_api.db.close_pool"),
    ):
        from medfinder_api.app import app as _app
        from medfinder_api import helpers

        helpers.set_store(store)
        _app.state.server_started_at = datetime(2026, 10, 19, 0, 0, 0, tzinfo=timezone.utc)

        yield _app

        helpers.set_store(None)


@pytest.fixture()
def client(app):
    return TestClient(app, raise_server_exceptions=False)
