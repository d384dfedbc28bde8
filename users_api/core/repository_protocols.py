"""Boundary Protocols — contract between the request handlers and persistence.

Invariants:
    - Handlers depend on UserRepository, never on the database SDK
    - Missing rows are signalled by returning None, never by raising
    - Every storage failure surfaces as StorageError (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
      (ADR: ExMA anti-pattern)
    - Rows are plain dicts: extra columns (created_at, ...) pass through untouched
"""

from typing import Any, Protocol

from users_api.core.domain_types import UserId


class UserRepository(Protocol):
    """Contract for user persistence, implemented by infrastructure/database.py."""
    async def list_all(self) -> list[dict[str, Any]]: ...
    async def get_by_id(self, user_id: UserId) -> dict[str, Any] | None: ...
    async def insert(self, name: str, email: str, age: int) -> dict[str, Any]: ...
    async def update(
        self, user_id: UserId, fields: dict[str, Any],
    ) -> dict[str, Any] | None: ...
    async def delete(self, user_id: UserId) -> dict[str, Any] | None: ...
    async def ping(self) -> bool: ...
