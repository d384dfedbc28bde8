"""Infrastructure Layer — the managed database client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with error mapping to core/errors.py

Design Decisions:
    - Thin repository over the raw SDK: handlers never see PostgREST types
"""
