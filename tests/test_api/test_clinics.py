"""Tests for clinic management and per-clinic inventory endpoints."""

from __future__ import annotations

NEW_CLINIC = {
    "name": "Upper Hill Clinic",
    "address": "Hospital Rd, Upper Hill",
    "phone": "+254700999000",
    "latitude": -1.2995,
    "longitude": 36.8123,
    "operating_hours": "Mon-Sat 08:00-17:00",
}


class TestListClinics:
    def test_returns_all(self, client):
        resp = client.get("/api/clinics")
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 3
        assert {c["id"] for c in data["data"]} == {"clinic-a", "clinic-b", "clinic-c"}


class TestGetClinic:
    def test_found(self, client):
        resp = client.get("/api/clinics/clinic-b")
        assert resp.status_code == 200
        assert resp.json()["data"]["name"] == "Clinic B"

    def test_not_found(self, client):
        assert client.get("/api/clinics/nope").status_code == 404


class TestCreateClinic:
    def test_creates_unverified_clinic(self, client, store):
        resp = client.post("/api/clinics", json=NEW_CLINIC)
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["id"]
        assert data["verified"] is False
        assert data["email"] == ""
        assert data["created_at"] is not None
        assert store.get_clinic(data["id"]).name == "Upper Hill Clinic"

    def test_invalid_latitude(self, client):
        resp = client.post("/api/clinics", json={**NEW_CLINIC, "latitude": 91})
        assert resp.status_code == 422

    def test_blank_name(self, client):
        resp = client.post("/api/clinics", json={**NEW_CLINIC, "name": "   "})
        assert resp.status_code == 422

    def test_missing_address(self, client):
        body = {k: v for k, v in NEW_CLINIC.items() if k != "address"}
        assert client.post("/api/clinics", json=body).status_code == 422


class TestUpdateClinic:
    def test_partial_update(self, client):
        resp = client.patch("/api/clinics/clinic-b", json={"verified": True})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["verified"] is True
        assert data["name"] == "Clinic B"

    def test_move_clinic_changes_search(self, client):
        client.patch("/api/clinics/clinic-c", json={"latitude": 0.0, "longitude": 0.01})
        data = client.get("/api/medicines/nearby?q=paracetamol&lat=0&lon=0").json()
        assert "clinic-c" in [r["clinic"]["id"] for r in data["data"]]

    def test_not_found(self, client):
        assert client.patch("/api/clinics/nope", json={"name": "X"}).status_code == 404

    def test_invalid_longitude(self, client):
        assert client.patch("/api/clinics/clinic-a", json={"longitude": 200}).status_code == 422


class TestClinicInventory:
    def test_lists_including_out_of_stock(self, client):
        resp = client.get("/api/clinics/clinic-a/inventory")
        assert resp.status_code == 200
        ids = {r["id"] for r in resp.json()["data"]}
        assert ids == {"inv-2", "inv-4"}

    def test_unknown_clinic(self, client):
        assert client.get("/api/clinics/nope/inventory").status_code == 404

    def test_add_item(self, client):
        resp = client.post(
            "/api/clinics/clinic-c/inventory",
            json={"medicine_name": "Ibuprofen", "dosage": "400mg", "quantity": 12, "price": 30},
        )
        assert resp.status_code == 201
        item = resp.json()["data"]
        assert item["clinic_id"] == "clinic-c"
        assert item["quantity"] == 12
        assert item["last_updated"] is not None

        data = client.get("/api/medicines/nearby?q=ibuprofen&lat=0&lon=1").json()
        assert [r["inventory"]["id"] for r in data["data"]] == [item["id"]]

    def test_add_item_without_price(self, client):
        resp = client.post(
            "/api/clinics/clinic-a/inventory",
            json={"medicine_name": "Cetirizine", "dosage": "10mg", "quantity": 0},
        )
        assert resp.status_code == 201
        assert resp.json()["data"]["price"] is None

    def test_add_item_unknown_clinic(self, client):
        resp = client.post(
            "/api/clinics/nope/inventory",
            json={"medicine_name": "Ibuprofen", "dosage": "400mg", "quantity": 1},
        )
        assert resp.status_code == 404

    def test_add_item_validation(self, client):
        url = "/api/clinics/clinic-a/inventory"
        base = {"medicine_name": "Ibuprofen", "dosage": "400mg", "quantity": 1}
        assert client.post(url, json={**base, "medicine_name": " "}).status_code == 422
        assert client.post(url, json={**base, "dosage": ""}).status_code == 422
        assert client.post(url, json={**base, "quantity": -1}).status_code == 422
        assert client.post(url, json={**base, "quantity": "lots"}).status_code == 422
        assert client.post(url, json={**base, "price": -5}).status_code == 422
