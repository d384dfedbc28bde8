"""Supabase User Repository — async managed-database client with error mapping.

Invariants:
    - One AsyncClient per process, built in the FastAPI lifespan and injected here
    - Every query targets a single table (settings.users_table)
    - PostgREST and transport (httpx) failures mapped to StorageError (core/errors.py)
    - An empty result from a filtered read/update/delete is the not-found sentinel (None)
    - No retry, no cache, no batching

Design Decisions:
    - update/delete are single filtered statements returning the affected rows
      (Prefer: return=representation): no read-then-write window between the
      existence check and the write (ADR: concurrent update/delete on one id)
    - Ids the database cannot parse (22P02, e.g. "abc" against a bigint key) are
      treated as missing rather than as storage failures
"""

import logging
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from users_api.core.domain_types import UserField, UserId
from users_api.core.errors import ConfigurationError, StorageError

logger = logging.getLogger(__name__)

# PostgreSQL "invalid_text_representation"
_INVALID_ID_CODE = "22P02"
_ID_FILTERED_OPERATIONS = frozenset({"get", "update", "delete"})


async def create_database_client(url: str, key: str) -> AsyncClient:
    """Build the managed database client. Called once at startup."""
    try:
        return await acreate_client(url, key)
    except Exception as e:
        raise ConfigurationError(f"Could not create database client: {e}") from e


class SupabaseUserRepository:
    """UserRepository backed by a Supabase (PostgREST) table."""

    def __init__(self, client: AsyncClient, table: str = "users"):
        self._client = client
        self.table = table

    def _query(self):
        return self._client.table(self.table)

    async def _execute(self, builder, operation: str) -> list[dict[str, Any]]:
        """Run a prepared query; map failures to StorageError."""
        try:
            response = await builder.execute()
        except APIError as e:
            if e.code == _INVALID_ID_CODE and operation in _ID_FILTERED_OPERATIONS:
                return []
            logger.error(
                f"Database {operation} failed: {e.message}",
                extra={"operation": operation, "error_code": e.code},
            )
            raise StorageError(e.message or str(e), operation, e.code) from e
        except httpx.HTTPError as e:
            logger.error(
                f"Database transport error during {operation}: {e}",
                extra={"operation": operation},
            )
            raise StorageError(str(e), operation) from e
        return response.data or []

    async def list_all(self) -> list[dict[str, Any]]:
        return await self._execute(self._query().select("*"), "list")

    async def get_by_id(self, user_id: UserId) -> dict[str, Any] | None:
        rows = await self._execute(
            self._query().select("*").eq("id", user_id).limit(1), "get",
        )
        return rows[0] if rows else None

    async def insert(self, name: str, email: str, age: int) -> dict[str, Any]:
        rows = await self._execute(
            self._query().insert({
                UserField.NAME.value: name,
                UserField.EMAIL.value: email,
                UserField.AGE.value: age,
            }),
            "create",
        )
        if not rows:
            raise StorageError("Insert returned no row", "create")
        return rows[0]

    async def update(
        self, user_id: UserId, fields: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Replace only the given columns. None if no row has this id."""
        if not fields:
            raise ValueError("update requires at least one field")
        rows = await self._execute(
            self._query().update(fields).eq("id", user_id), "update",
        )
        return rows[0] if rows else None

    async def delete(self, user_id: UserId) -> dict[str, Any] | None:
        """Delete and return the row as it was. None if no row has this id."""
        rows = await self._execute(
            self._query().delete().eq("id", user_id), "delete",
        )
        return rows[0] if rows else None

    async def ping(self) -> bool:
        """Check the table is reachable (for readiness probes)."""
        try:
            await self._execute(self._query().select("id").limit(1), "ping")
            return True
        except StorageError as e:
            logger.error(f"Database health check failed: {e.detail}")
            return False
