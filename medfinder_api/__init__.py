"""Clinic Medicine Finder — HTTP API and record-store backends."""
