"""API Index — GET / describes the service and its endpoints."""

from fastapi import APIRouter

from users_api import __version__
from users_api.config import USER_PREFIXES

router = APIRouter(tags=["index"])


@router.get("/")
async def index():
    prefix = USER_PREFIXES[0]
    return {
        "success": True,
        "message": "Users API - CRUD",
        "version": __version__,
        "prefixes": list(USER_PREFIXES),
        "endpoints": {
            "list": f"GET {prefix}",
            "get": f"GET {prefix}/:id",
            "create": f"POST {prefix}",
            "update": f"PUT {prefix}/:id",
            "delete": f"DELETE {prefix}/:id",
        },
    }
