"""Users API — REST CRUD service for a single user resource.

Invariants:
    - Package root contains no executable code beyond the version string

Design Decisions:
    - Empty of re-exports: explicit imports only, no star exports
      (ADR: ExMA no convention-over-config)
"""

__version__ = "1.0.0"
