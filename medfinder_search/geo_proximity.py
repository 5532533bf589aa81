#!/usr/bin/env python3
"""
Clinic Medicine Finder — Great-circle distance

Distance between a patient and a clinic is computed with the Haversine
formula on a spherical Earth.  No external geo-libraries required.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EARTH_RADIUS_KM = 6371.0

DEFAULT_SEARCH_RADIUS_KM = 50.0


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 coordinate pair in degrees."""
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """Check whether the pair lies within the geographic degree ranges."""
        return (
            -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
        )


# ---------------------------------------------------------------------------
# Core distance calculation
# ---------------------------------------------------------------------------


def haversine_km(coord_a: Coordinate, coord_b: Coordinate) -> float:
    """
    Compute the great-circle distance in kilometres between two points.

    Coordinates are not range-checked: out-of-range degrees still yield a
    number, it just doesn't mean anything.
    """
    lat1 = math.radians(coord_a.latitude)
    lat2 = math.radians(coord_b.latitude)
    dlat = math.radians(coord_b.latitude - coord_a.latitude)
    dlon = math.radians(coord_b.longitude - coord_a.longitude)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in km between two raw lat/lon pairs."""
    return haversine_km(Coordinate(lat1, lon1), Coordinate(lat2, lon2))
