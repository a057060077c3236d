from pydantic import BaseModel
from typing import Optional


class OkResponse(BaseModel):
    """Standard success response"""
    ok: bool = True


class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Missing fields."
            }
        }


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = "healthy"
    service: str = "sleep-diary-api"
    version: str
    timestamp: str
    storage_backend: Optional[str] = None
    storage_state: str
