"""Users API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery, ExMA anti-pattern)
    - The user router is mounted under both /usuarios and /api/usuarios
    - Global error handlers render every failure as the {success, message} envelope
    - CORS configured from settings (not hardcoded)
    - Database client built once on startup via lifespan, never re-created

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Repository stored on app.state and injected per request
      (api/dependencies.py) instead of a process-wide import-time client
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_api import __version__
from users_api.api.error_handlers import register_error_handlers
from users_api.api.routes import health, index, users
from users_api.config import USER_PREFIXES, get_settings
from users_api.infrastructure.database import (
    SupabaseUserRepository, create_database_client,
)
from users_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    client = await create_database_client(
        settings.supabase_url, settings.supabase_key,
    )
    app.state.user_repository = SupabaseUserRepository(
        client, settings.users_table,
    )
    logger.info(
        f"Users API started (table '{settings.users_table}', "
        f"prefixes {', '.join(USER_PREFIXES)})",
    )
    yield
    app.state.user_repository = None
    logger.info("Users API shutting down")


app = FastAPI(title="Users API", version=__version__, lifespan=lifespan)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration; second prefix kept out of the OpenAPI schema
app.include_router(index.router)
app.include_router(health.router)
app.include_router(users.router, prefix=USER_PREFIXES[0])
for extra_prefix in USER_PREFIXES[1:]:
    app.include_router(
        users.router, prefix=extra_prefix, include_in_schema=False,
    )

register_error_handlers(app, expose_details=settings.expose_error_details)
