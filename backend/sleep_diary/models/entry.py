from dataclasses import dataclass, field, fields
from typing import Optional, Dict, Any

from .user import utc_timestamp


@dataclass
class Entry:
    """One night of sleep for one user, keyed by (user_id, date)"""
    id: Optional[int] = None
    user_id: int = 0
    date: str = ""
    bed_time: str = ""
    wake_time: str = ""
    duration: float = 0.0
    screen_time: float = 0.0
    energy: int = 0
    notes: str = ""
    created_at: str = field(default_factory=utc_timestamp)

    def __post_init__(self):
        if self.notes is None:
            self.notes = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage and the JSON API"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.date,
            "bed_time": self.bed_time,
            "wake_time": self.wake_time,
            "duration": self.duration,
            "screen_time": self.screen_time,
            "energy": self.energy,
            "notes": self.notes,
            "created_at": self.created_at,
        }
