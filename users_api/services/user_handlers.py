"""User Handlers — list, get, create, update, delete over a UserRepository.

Invariants:
    - Each handler performs at most one repository call
    - Bodies arrive already validated and normalized (schemas/user.py)
    - Not-found sentinel (None) → UserNotFoundError (404)
    - StorageError propagates untouched; the global handler renders it as 500
    - Every success returns an Envelope; the route decides the status code

Design Decisions:
    - Handlers depend on the UserRepository Protocol, not the Supabase SDK
      (ADR: tests swap in an in-memory repository)
    - Empty update rejected here, not in the schema: "no fields" is a request-level
      rule, field rules stay in core/validators.py
"""

import logging

from users_api.core.domain_types import UserId
from users_api.core.errors import UserNotFoundError, UserValidationError
from users_api.core.repository_protocols import UserRepository
from users_api.schemas.user import Envelope, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserHandlers:
    """CRUD orchestration for the user resource."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def list_users(self) -> Envelope:
        users = await self.repository.list_all()
        return Envelope(
            success=True, message="Users retrieved successfully",
            data=users, count=len(users),
        )

    async def get_user(self, user_id: UserId) -> Envelope:
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return Envelope(
            success=True, message="User retrieved successfully", data=user,
        )

    async def create_user(self, body: UserCreate) -> Envelope:
        user = await self.repository.insert(body.name, body.email, body.age)
        logger.info("User created", extra={"user_id": user.get("id")})
        return Envelope(
            success=True, message="User created successfully", data=user,
        )

    async def update_user(
        self, user_id: UserId, body: UserUpdate | None,
    ) -> Envelope:
        """Replace only the supplied fields; the rest are retained."""
        changes = body.changes() if body else {}
        if not changes:
            raise UserValidationError(
                "Provide at least one field to update",
            )
        user = await self.repository.update(user_id, changes)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(
            f"User updated ({', '.join(sorted(changes))})",
            extra={"user_id": user_id},
        )
        return Envelope(
            success=True, message="User updated successfully", data=user,
        )

    async def delete_user(self, user_id: UserId) -> Envelope:
        user = await self.repository.delete(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("User deleted", extra={"user_id": user_id})
        return Envelope(
            success=True, message="User deleted successfully", data=user,
        )
