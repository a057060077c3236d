from fastapi import APIRouter

from .routes import (
    auth_router,
    entries_router,
    admin_router,
    health_router
)
from .schemas import ErrorResponse

ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 403, 404, 409, 500, 503)
}


def build_api_router(prefix: str = "/api") -> APIRouter:
    """Main API router with every route module included"""
    api_router = APIRouter(prefix=prefix, responses=ERROR_RESPONSES)

    api_router.include_router(auth_router)
    api_router.include_router(entries_router)
    api_router.include_router(admin_router)
    api_router.include_router(health_router)

    return api_router
