"""Error Handlers — global exception handlers rendering the response envelope.

Invariants:
    - UsersApiError → its own http_status and to_response() envelope
    - RequestValidationError → 400 with the first offending field's message
    - Unmatched route → 404 {success: false, message: "Route not found", path}
    - Exception (catch-all) → 500; exception text only when expose_details is on

Design Decisions:
    - Four-layer handler: domain (UsersApiError), validation (Pydantic),
      routing (Starlette HTTPException), catch-all (Exception)
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.core.errors import UsersApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, expose_details: bool = False) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app, expose_details)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UsersApiError)
    async def users_api_error_handler(request: Request, exc: UsersApiError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Routing-level errors raised by Starlette (no route, wrong method)."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = {
                "success": False,
                "message": "Route not found",
                "path": request.url.path,
            }
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            content = {"success": False, "message": "Method not allowed"}
        else:
            content = {"success": False, "message": str(exc.detail)}
        return JSONResponse(
            status_code=exc.status_code, content=content, headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI, expose_details: bool) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all safety net."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        content = {"success": False, "message": "Internal server error"}
        if expose_details:
            content["error"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content,
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Envelope carrying the first error; field order is name, email, age."""
    errors = exc.errors()
    if not errors:
        return {"success": False, "message": "Invalid request data"}
    first = errors[0]
    if first["type"] == "json_invalid":
        return {"success": False, "message": "Request body is not valid JSON"}
    return {"success": False, "message": first["msg"]}
