#!/usr/bin/env python3
"""
Clinic Medicine Finder — API

Dual-mode FastAPI server:
  • Database mode — clinics and inventory in PostgreSQL when reachable
  • JSON fallback — clinics.json / inventory.json from MEDFINDER_DATA_DIR

Usage:
    uvicorn medfinder_api.app:app --reload --port 8000
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import db, helpers
from .routes import clinics, health, inventory, medicines
from .stores import JsonRecordStore, PostgresRecordStore

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Clinic Medicine Finder",
    version="1.0.0",
    description="Find clinics near you that have a medicine in stock",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(medicines.router)
app.include_router(clinics.router)
app.include_router(inventory.router)

app.state.server_started_at = datetime.now(timezone.utc)


def init_store():
    """Pick the record store: PostgreSQL if reachable, else the JSON files."""
    if db.init_pool():
        db.ensure_schema()
        logger.info("Running in DATABASE mode")
        store = PostgresRecordStore()
    else:
        logger.info("Running in JSON FALLBACK mode (%s)", helpers.DATA_DIR)
        store = JsonRecordStore(helpers.DATA_DIR).load()
    helpers.set_store(store)
    return store


@app.on_event("startup")
async def startup():
    app.state.server_started_at = datetime.now(timezone.utc)
    init_store()


@app.on_event("shutdown")
async def shutdown():
    db.close_pool()
