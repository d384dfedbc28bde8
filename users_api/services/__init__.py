"""Services Layer — request handlers between the routes and the repository.

Invariants:
    - Handlers never touch HTTP objects (Request, Response)
    - Handlers never import the database SDK

Design Decisions:
    - One handler class per resource (ADR: ExMA no god objects)
"""
