from fastapi import APIRouter, Depends, Request
from datetime import datetime, timezone

from ..schemas import HealthResponse
from ...auth.dependencies import get_settings
from ...core.config import Settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(request: Request, settings: Settings = Depends(get_settings)):
    """Health check endpoint, reports the store state without touching it"""
    handle = request.app.state.store_handle
    state = handle.state.value

    return HealthResponse(
        status="healthy" if state == "ready" else "unhealthy",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        storage_backend=handle.backend_name,
        storage_state=state
    )
