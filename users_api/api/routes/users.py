"""User Routes — the five CRUD endpoints for the user resource.

Invariants:
    - Router carries no prefix: main.py mounts it under every USER_PREFIXES entry
    - Collection routes answer with and without a trailing slash (no 307 redirect)
    - Bodies (JSON or form) validated by api/dependencies.py before reaching the handler
    - Routes never contain business logic (delegate to services/user_handlers.py)

Design Decisions:
    - exclude_unset on the Envelope: optional keys (data, count) appear only
      when the handler set them, while null columns inside data are kept
    - Request body documented through openapi_extra: the body is parsed by a
      dependency, so FastAPI cannot derive it from a parameter
"""

from fastapi import APIRouter, Depends, status

from users_api.api.dependencies import (
    get_user_create, get_user_handlers, get_user_update,
)
from users_api.core.domain_types import UserId
from users_api.schemas.user import Envelope, UserCreate, UserUpdate
from users_api.services.user_handlers import UserHandlers

router = APIRouter(tags=["users"])

_ENVELOPE = {"response_model": Envelope, "response_model_exclude_unset": True}
_SLASH_ALIAS = {**_ENVELOPE, "include_in_schema": False}


def _request_body(model) -> dict:
    schema = model.model_json_schema()
    return {"requestBody": {"content": {
        "application/json": {"schema": schema},
        "application/x-www-form-urlencoded": {"schema": schema},
    }}}


@router.get("", **_ENVELOPE)
@router.get("/", **_SLASH_ALIAS)
async def list_users(handlers: UserHandlers = Depends(get_user_handlers)):
    """List every user."""
    return await handlers.list_users()


@router.get("/{user_id}", **_ENVELOPE)
async def get_user(
    user_id: str, handlers: UserHandlers = Depends(get_user_handlers),
):
    return await handlers.get_user(UserId(user_id))


@router.post(
    "", status_code=status.HTTP_201_CREATED,
    openapi_extra=_request_body(UserCreate), **_ENVELOPE,
)
@router.post("/", status_code=status.HTTP_201_CREATED, **_SLASH_ALIAS)
async def create_user(
    body: UserCreate = Depends(get_user_create),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Create a user from {name, email, age}."""
    return await handlers.create_user(body)


@router.put(
    "/{user_id}", openapi_extra=_request_body(UserUpdate), **_ENVELOPE,
)
async def update_user(
    user_id: str,
    body: UserUpdate | None = Depends(get_user_update),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Partial update: any subset of {name, email, age}."""
    return await handlers.update_user(UserId(user_id), body)


@router.delete("/{user_id}", **_ENVELOPE)
async def delete_user(
    user_id: str, handlers: UserHandlers = Depends(get_user_handlers),
):
    """Delete a user and return the record as it was."""
    return await handlers.delete_user(UserId(user_id))
