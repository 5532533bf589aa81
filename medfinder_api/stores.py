"""
Record-store backends for the Clinic Medicine Finder.

Two interchangeable implementations of the store the locator reads from,
plus the clinic/inventory management operations the API exposes:

  • PostgresRecordStore — psycopg2 pool, tables clinics / clinic_inventory
  • JsonRecordStore     — clinics.json / inventory.json in a data directory,
                          held in memory and written back on every change
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Any

import psycopg2
from psycopg2 import sql

from medfinder_search import (
    Clinic,
    ClinicLookupFailed,
    InventoryRecord,
    StoreUnavailable,
)

from . import db
from .db import extras
from .helpers import row_to_clinic, row_to_inventory, utcnow

logger = logging.getLogger(__name__)

CLINIC_FIELDS = (
    "name",
    "address",
    "phone",
    "email",
    "latitude",
    "longitude",
    "operating_hours",
    "verified",
)
INVENTORY_FIELDS = ("clinic_id", "medicine_name", "dosage", "quantity", "price")


def _new_id() -> str:
    return uuid.uuid4().hex


def _only(data: dict[str, Any], allowed: tuple[str, ...]) -> dict[str, Any]:
    unknown = set(data) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown field(s): {sorted(unknown)}")
    return dict(data)


# ---------------------------------------------------------------------------
# JSON file store
# ---------------------------------------------------------------------------


class JsonRecordStore:
    """Clinic and inventory records kept in two JSON files."""

    mode = "json_fallback"

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self.clinics_path = self.data_dir / "clinics.json"
        self.inventory_path = self.data_dir / "inventory.json"
        self._clinics: dict[str, Clinic] = {}
        self._inventory: dict[str, InventoryRecord] = {}
        self._lock = threading.Lock()

    # -- loading / saving ---------------------------------------------------

    def _read(self, path: Path) -> list[dict]:
        if not path.exists():
            logger.info("%s not found, starting empty", path)
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                docs = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreUnavailable(f"Could not read {path}: {e}") from e
        if not isinstance(docs, list):
            raise StoreUnavailable(f"{path} must contain a JSON array")
        return docs

    def load(self) -> "JsonRecordStore":
        """(Re)load both files.  Raises StoreUnavailable on unreadable data."""
        try:
            clinics = [row_to_clinic(d) for d in self._read(self.clinics_path)]
            inventory = [row_to_inventory(d) for d in self._read(self.inventory_path)]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreUnavailable(f"Malformed record in {self.data_dir}: {e}") from e

        with self._lock:
            self._clinics = {c.id: c for c in clinics}
            self._inventory = {r.id: r for r in inventory}
        logger.info(
            "Loaded %d clinics and %d inventory rows from %s",
            len(self._clinics), len(self._inventory), self.data_dir,
        )
        return self

    def _write(self, path: Path, docs: list[dict]) -> Path:
        """Write docs beside path and return the temp file to move into place."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(docs, f, indent=2, ensure_ascii=False)
        return tmp

    def _save(self, clinics: dict[str, Clinic], inventory: dict[str, InventoryRecord]) -> None:
        """
        Persist both collections, then make them the live snapshot.

        Both files are staged before either is replaced, and memory is only
        updated once the files are in place.
        """
        files = [
            (self.clinics_path, [c.to_dict() for c in clinics.values()]),
            (self.inventory_path, [r.to_dict() for r in inventory.values()]),
        ]
        staged: list[tuple[Path, Path]] = []
        try:
            for path, docs in files:
                staged.append((self._write(path, docs), path))
            for tmp, path in staged:
                tmp.replace(path)
        except OSError as e:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            raise StoreUnavailable(f"Could not write to {self.data_dir}: {e}") from e
        self._clinics = clinics
        self._inventory = inventory

    # -- clinics ------------------------------------------------------------

    def list_clinics(self) -> list[Clinic]:
        return list(self._clinics.values())

    def get_clinic(self, clinic_id: str) -> Clinic | None:
        return self._clinics.get(clinic_id)

    def create_clinic(self, data: dict[str, Any]) -> Clinic:
        clinic = Clinic(id=_new_id(), created_at=utcnow(), **_only(data, CLINIC_FIELDS))
        with self._lock:
            self._save({**self._clinics, clinic.id: clinic}, self._inventory)
        return clinic

    def update_clinic(self, clinic_id: str, updates: dict[str, Any]) -> Clinic:
        with self._lock:
            if clinic_id not in self._clinics:
                raise KeyError(clinic_id)
            clinic = replace(self._clinics[clinic_id], **_only(updates, CLINIC_FIELDS))
            self._save({**self._clinics, clinic_id: clinic}, self._inventory)
        return clinic

    # -- inventory ----------------------------------------------------------

    def list_inventory(self, clinic_id: str | None = None) -> list[InventoryRecord]:
        rows = list(self._inventory.values())
        if clinic_id is not None:
            rows = [r for r in rows if r.clinic_id == clinic_id]
        return rows

    def get_inventory_item(self, item_id: str) -> InventoryRecord | None:
        return self._inventory.get(item_id)

    def add_inventory_item(self, data: dict[str, Any]) -> InventoryRecord:
        item = InventoryRecord(id=_new_id(), last_updated=utcnow(), **_only(data, INVENTORY_FIELDS))
        with self._lock:
            self._save(self._clinics, {**self._inventory, item.id: item})
        return item

    def update_inventory_item(self, item_id: str, updates: dict[str, Any]) -> InventoryRecord:
        with self._lock:
            if item_id not in self._inventory:
                raise KeyError(item_id)
            item = replace(
                self._inventory[item_id],
                last_updated=utcnow(),
                **_only(updates, INVENTORY_FIELDS),
            )
            self._save(self._clinics, {**self._inventory, item_id: item})
        return item

    def delete_inventory_item(self, item_id: str) -> None:
        with self._lock:
            if item_id not in self._inventory:
                raise KeyError(item_id)
            inventory = dict(self._inventory)
            del inventory[item_id]
            self._save(self._clinics, inventory)


# ---------------------------------------------------------------------------
# PostgreSQL store
# ---------------------------------------------------------------------------


class PostgresRecordStore:
    """Clinic and inventory records in PostgreSQL (see sql/001_schema.sql)."""

    mode = "database"

    def _fetchall(self, query, params=()) -> list[dict]:
        try:
            with db.get_conn() as conn:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(query, params)
                    return cur.fetchall()
        except psycopg2.Error as e:
            raise StoreUnavailable(f"Database query failed: {e}") from e

    def _fetchone(self, query, params=()) -> dict | None:
        rows = self._fetchall(query, params)
        return rows[0] if rows else None

    def _insert(self, table: str, values: dict[str, Any]) -> dict:
        cols = list(values)
        query = sql.SQL("INSERT INTO {} ({}) VALUES ({}) RETURNING *").format(
            sql.Identifier(table),
            sql.SQL(", ").join(map(sql.Identifier, cols)),
            sql.SQL(", ").join(sql.Placeholder() * len(cols)),
        )
        return self._fetchone(query, [values[c] for c in cols])

    def _update(self, table: str, row_id: str, values: dict[str, Any]) -> dict | None:
        if not values:
            return self._fetchone(
                sql.SQL("SELECT * FROM {} WHERE id = %s").format(sql.Identifier(table)),
                (row_id,),
            )
        cols = list(values)
        query = sql.SQL("UPDATE {} SET {} WHERE id = %s RETURNING *").format(
            sql.Identifier(table),
            sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(c)) for c in cols
            ),
        )
        return self._fetchone(query, [values[c] for c in cols] + [row_id])

    # -- clinics ------------------------------------------------------------

    def list_clinics(self) -> list[Clinic]:
        rows = self._fetchall("SELECT * FROM clinics ORDER BY created_at, id")
        return [row_to_clinic(r) for r in rows]

    def get_clinic(self, clinic_id: str) -> Clinic | None:
        try:
            row = self._fetchone("SELECT * FROM clinics WHERE id = %s", (clinic_id,))
        except StoreUnavailable as e:
            raise ClinicLookupFailed(clinic_id, str(e)) from e
        return row_to_clinic(row) if row else None

    def create_clinic(self, data: dict[str, Any]) -> Clinic:
        values = _only(data, CLINIC_FIELDS)
        values["id"] = _new_id()
        values["created_at"] = utcnow()
        return row_to_clinic(self._insert("clinics", values))

    def update_clinic(self, clinic_id: str, updates: dict[str, Any]) -> Clinic:
        row = self._update("clinics", clinic_id, _only(updates, CLINIC_FIELDS))
        if row is None:
            raise KeyError(clinic_id)
        return row_to_clinic(row)

    # -- inventory ----------------------------------------------------------

    def list_inventory(self, clinic_id: str | None = None) -> list[InventoryRecord]:
        if clinic_id is None:
            rows = self._fetchall("SELECT * FROM clinic_inventory ORDER BY last_updated, id")
        else:
            rows = self._fetchall(
                "SELECT * FROM clinic_inventory WHERE clinic_id = %s ORDER BY last_updated, id",
                (clinic_id,),
            )
        return [row_to_inventory(r) for r in rows]

    def get_inventory_item(self, item_id: str) -> InventoryRecord | None:
        row = self._fetchone("SELECT * FROM clinic_inventory WHERE id = %s", (item_id,))
        return row_to_inventory(row) if row else None

    def add_inventory_item(self, data: dict[str, Any]) -> InventoryRecord:
        values = _only(data, INVENTORY_FIELDS)
        values["id"] = _new_id()
        values["last_updated"] = utcnow()
        return row_to_inventory(self._insert("clinic_inventory", values))

    def update_inventory_item(self, item_id: str, updates: dict[str, Any]) -> InventoryRecord:
        values = _only(updates, INVENTORY_FIELDS)
        values["last_updated"] = utcnow()
        row = self._update("clinic_inventory", item_id, values)
        if row is None:
            raise KeyError(item_id)
        return row_to_inventory(row)

    def delete_inventory_item(self, item_id: str) -> None:
        rows = self._fetchall("DELETE FROM clinic_inventory WHERE id = %s RETURNING id", (item_id,))
        if not rows:
            raise KeyError(item_id)
