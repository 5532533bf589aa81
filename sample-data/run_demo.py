#!/usr/bin/env python3
"""
Clinic Medicine Finder — Command-line Demo

Runs a nearby-medicine search against the JSON sample data (or any data
directory with clinics.json / inventory.json) and prints the ranked results.

Usage:
    python sample-data/run_demo.py paracetamol --lat -1.2921 --lon 36.7856
    python sample-data/run_demo.py amox --lat -1.28 --lon 36.82 --radius-km 10
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from medfinder_api.stores import JsonRecordStore
from medfinder_search import DEFAULT_SEARCH_RADIUS_KM, StoreUnavailable, find_nearby_medicine

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find nearby clinics stocking a medicine")
    parser.add_argument("query", help="Medicine name (substring, case-insensitive)")
    parser.add_argument("--lat", type=float, required=True, help="Your latitude")
    parser.add_argument("--lon", type=float, required=True, help="Your longitude")
    parser.add_argument("--radius-km", type=float, default=DEFAULT_SEARCH_RADIUS_KM)
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if not args.query.strip():
        logger.error("Please enter a medicine name to search")
        return 2

    try:
        store = JsonRecordStore(args.data_dir).load()
        results = find_nearby_medicine(store, args.query, args.lat, args.lon, args.radius_km)
    except StoreUnavailable as e:
        logger.error("Search failed: %s", e)
        return 1

    if not results:
        print(f"No clinics found with {args.query} within {args.radius_km:g} km")
        return 0

    print(f"{len(results)} clinic(s) with {args.query} within {args.radius_km:g} km:\n")
    for m in results:
        price = f"{m.inventory.price:.2f}" if m.inventory.price is not None else "n/a"
        print(f"  {m.distance_km:7.2f} km  {m.clinic.name}")
        print(f"             {m.inventory.medicine_name} {m.inventory.dosage}"
              f", qty {m.inventory.quantity}, price {price}")
        print(f"             {m.clinic.address} | {m.clinic.operating_hours}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
