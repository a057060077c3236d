from pydantic import BaseModel, Field
from typing import List, Optional


class EntryUpsert(BaseModel):
    """Schema for creating or replacing the entry of one day"""
    date: str = Field(..., min_length=1, description="Calendar date, YYYY-MM-DD")
    bed_time: str = Field(..., alias="bedTime", min_length=1)
    wake_time: str = Field(..., alias="wakeTime", min_length=1)
    duration: float = Field(..., ge=0, allow_inf_nan=False, description="Hours slept")
    screen_time: float = Field(
        ..., alias="screenTime", ge=0, allow_inf_nan=False, description="Hours of screen time"
    )
    energy: int = Field(..., description="Energy rating")
    notes: Optional[str] = ""

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "date": "2024-01-01",
                "bedTime": "23:00",
                "wakeTime": "07:00",
                "duration": 8,
                "screenTime": 1.5,
                "energy": 4,
                "notes": ""
            }
        }


class EntryResponse(BaseModel):
    """Schema for entry response"""
    id: int
    user_id: int
    date: str
    bed_time: str
    wake_time: str
    duration: float
    screen_time: float
    energy: int
    notes: str = ""
    created_at: str

    class Config:
        from_attributes = True


class AdminUserResponse(BaseModel):
    """A non-admin user with all of their entries"""
    id: int
    username: str
    created_at: str
    entries: List[EntryResponse]
