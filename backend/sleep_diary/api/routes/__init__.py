from .auth import router as auth_router
from .entries import router as entries_router
from .admin import router as admin_router
from .health import router as health_router

__all__ = [
    "auth_router",
    "entries_router",
    "admin_router",
    "health_router"
]
