"""FastAPI Dependencies — repository injection and request-body parsing.

Invariants:
    - The repository is created once in the lifespan and read from app.state
    - A request arriving before startup completed fails loudly (RuntimeError → 500)
    - Bodies are accepted as JSON or as form data (urlencoded / multipart);
      both pass through the same UserCreate / UserUpdate validation
    - A POST with no body validates as {} so the client sees the field message
      ("Name is required and must be text"), not a generic "Field required"

Design Decisions:
    - app.state over a module-level singleton: tests override get_user_repository
      via app.dependency_overrides without patching globals
    - Body parsed here instead of by a typed route parameter: FastAPI binds a
      model parameter to one media type only
"""

import json
from typing import Any

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from users_api.core.repository_protocols import UserRepository
from users_api.schemas.user import UserCreate, UserUpdate
from users_api.services.user_handlers import UserHandlers

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_user_repository(request: Request) -> UserRepository:
    repository = getattr(request.app.state, "user_repository", None)
    if repository is None:
        raise RuntimeError("Database client not initialized")
    return repository


def get_user_handlers(
    repository: UserRepository = Depends(get_user_repository),
) -> UserHandlers:
    return UserHandlers(repository)


# ─── Request bodies ──────────────────────────────────────────────

async def read_body(request: Request) -> Any:
    """Decoded request body; None when the request carries none."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise RequestValidationError([{
            "type": "json_invalid",
            "loc": ("body", e.pos),
            "msg": "JSON decode error",
            "input": {},
            "ctx": {"error": e.msg},
        }]) from e


def _validate(model: type[BaseModel], data: Any) -> BaseModel:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


async def get_user_create(body: Any = Depends(read_body)) -> UserCreate:
    return _validate(UserCreate, {} if body is None else body)


async def get_user_update(body: Any = Depends(read_body)) -> UserUpdate | None:
    return None if body is None else _validate(UserUpdate, body)
