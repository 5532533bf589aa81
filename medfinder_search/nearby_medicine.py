#!/usr/bin/env python3
"""
Clinic Medicine Finder — Nearby Medicine Search

Scan-then-filter pipeline over a record store:

    1. enumerate every inventory row
    2. keep rows in stock whose medicine name contains the query (case-folded)
    3. join each row to its clinic, dropping rows whose clinic can't be found
    4. Haversine distance from the user to each clinic
    5. keep results within the radius (inclusive), sorted nearest first

A failed enumeration fails the whole search with StoreUnavailable.  A failed
clinic lookup only drops that one row, so a stale reference never hides the
remaining matches.
"""

from __future__ import annotations

import logging

from .geo_proximity import DEFAULT_SEARCH_RADIUS_KM, Coordinate, haversine_km
from .records import (
    Clinic,
    InventoryRecord,
    MatchResult,
    RecordStore,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)

_MISSING = object()


def _load_inventory(store: RecordStore) -> list[InventoryRecord]:
    try:
        return list(store.list_inventory())
    except StoreUnavailable:
        raise
    except Exception as e:
        raise StoreUnavailable(f"Inventory enumeration failed: {e}") from e


def matches_query(record: InventoryRecord, query: str) -> bool:
    """In stock and the medicine name contains the query, ignoring case."""
    return record.quantity > 0 and query.casefold() in record.medicine_name.casefold()


def search_medicine_in_clinics(store: RecordStore, query: str) -> list[MatchResult]:
    """
    Find in-stock inventory rows matching the query, joined to their clinics.

    Results are unranked (``distance_km`` is None) and keep the store's
    enumeration order.
    """
    rows = [r for r in _load_inventory(store) if matches_query(r, query)]

    clinics: dict[str, Clinic | None] = {}
    results: list[MatchResult] = []
    for row in rows:
        clinic = clinics.get(row.clinic_id, _MISSING)
        if clinic is _MISSING:
            try:
                clinic = store.get_clinic(row.clinic_id)
            except Exception as e:
                logger.warning(
                    "Skipping inventory %s: clinic %s lookup failed (%s)",
                    row.id, row.clinic_id, e,
                )
                clinic = None
            else:
                if clinic is None:
                    logger.info(
                        "Skipping inventory %s: clinic %s not found", row.id, row.clinic_id
                    )
            clinics[row.clinic_id] = clinic

        if clinic is None:
            continue
        results.append(MatchResult(clinic=clinic, inventory=row))

    return results


def find_nearby_medicine(
    store: RecordStore,
    query: str,
    user_lat: float,
    user_lon: float,
    max_distance_km: float = DEFAULT_SEARCH_RADIUS_KM,
) -> list[MatchResult]:
    """
    Rank clinics stocking ``query`` by distance from the user.

    Parameters
    ----------
    store : RecordStore
        Backend supplying inventory rows and clinic lookups.
    query : str
        Medicine name fragment.  An empty string matches every row.
    user_lat, user_lon : float
        User position in degrees.  Not range-checked.
    max_distance_km : float
        Inclusive search radius.

    Raises
    ------
    StoreUnavailable
        If the inventory could not be enumerated.
    """
    user = Coordinate(latitude=user_lat, longitude=user_lon)

    ranked = []
    for match in search_medicine_in_clinics(store, query):
        clinic = match.clinic
        dist = haversine_km(user, Coordinate(clinic.latitude, clinic.longitude))
        if dist <= max_distance_km:
            ranked.append(MatchResult(clinic=clinic, inventory=match.inventory, distance_km=dist))

    # list.sort is stable: equal distances keep filter order
    ranked.sort(key=lambda m: m.distance_km)

    logger.debug(
        "Nearby search %r at (%s, %s) within %s km: %d result(s)",
        query, user_lat, user_lon, max_distance_km, len(ranked),
    )
    return ranked
