"""Clinic Medicine Finder — Nearby medicine search."""

from .geo_proximity import (
    DEFAULT_SEARCH_RADIUS_KM,
    EARTH_RADIUS_KM,
    Coordinate,
    calculate_distance,
    haversine_km,
)
from .nearby_medicine import (
    find_nearby_medicine,
    matches_query,
    search_medicine_in_clinics,
)
from .records import (
    Clinic,
    ClinicLookupFailed,
    InventoryRecord,
    MatchResult,
    RecordStore,
    RecordStoreError,
    StoreUnavailable,
)

__all__ = [
    "DEFAULT_SEARCH_RADIUS_KM",
    "EARTH_RADIUS_KM",
    "Coordinate",
    "calculate_distance",
    "haversine_km",
    "find_nearby_medicine",
    "matches_query",
    "search_medicine_in_clinics",
    "Clinic",
    "ClinicLookupFailed",
    "InventoryRecord",
    "MatchResult",
    "RecordStore",
    "RecordStoreError",
    "StoreUnavailable",
]
