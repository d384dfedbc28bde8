"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, response envelope)
    - Field rules come from core/validators.py, never redefined here

Design Decisions:
    - No persistence models: rows come back from the managed database as dicts
"""
