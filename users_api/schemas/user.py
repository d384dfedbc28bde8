"""User Schemas — Pydantic models validated at the API boundary.

Invariants:
    - UserCreate requires all three fields; a missing field reports the same
      message as an invalid one ("Name is required and must be text")
    - UserUpdate validates only the fields the client sent; null counts as absent
    - Field values leave the schema already normalized (stripped, lowercased, int)
    - Envelope is the only response shape; optional keys dropped when None

Design Decisions:
    - Fields typed Any and checked by core/validators.py: one source of truth for
      messages instead of Pydantic's generic type errors (ADR: uniform 400 messages)
    - PydanticCustomError over ValueError: message reaches the client without the
      "Value error, " prefix
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from users_api.core.domain_types import UserField
from users_api.core.validators import (
    ValidationResult,
    normalize_age,
    normalize_email,
    normalize_name,
    validate_age,
    validate_email,
    validate_name,
)


def _reject_unless_valid(result: ValidationResult) -> None:
    if not result.valid:
        raise PydanticCustomError("user_field", result.message)


class UserCreate(BaseModel):
    """User creation: every field required, validated and normalized."""
    name: Any = Field(None, validate_default=True)
    email: Any = Field(None, validate_default=True)
    age: Any = Field(None, validate_default=True)

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Any) -> str:
        _reject_unless_valid(validate_name(v))
        return normalize_name(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Any) -> str:
        _reject_unless_valid(validate_email(v))
        return normalize_email(v)

    @field_validator("age")
    @classmethod
    def check_age(cls, v: Any) -> int:
        _reject_unless_valid(validate_age(v))
        return normalize_age(v)


class UserUpdate(BaseModel):
    """Partial update: only supplied, non-null fields are validated."""
    name: Any = None
    email: Any = None
    age: Any = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Any) -> str | None:
        if v is None:
            return None
        _reject_unless_valid(validate_name(v))
        return normalize_name(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Any) -> str | None:
        if v is None:
            return None
        _reject_unless_valid(validate_email(v))
        return normalize_email(v)

    @field_validator("age")
    @classmethod
    def check_age(cls, v: Any) -> int | None:
        if v is None:
            return None
        _reject_unless_valid(validate_age(v))
        return normalize_age(v)

    def changes(self) -> dict[str, Any]:
        """Column → new value for every field the client actually supplied."""
        return {
            f.value: getattr(self, f.value)
            for f in UserField
            if getattr(self, f.value) is not None
        }


class Envelope(BaseModel):
    """Uniform response wrapper returned by every endpoint."""
    success: bool
    message: str
    data: dict[str, Any] | list[dict[str, Any]] | None = None
    count: int | None = None
    error: str | None = None
