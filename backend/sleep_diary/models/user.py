from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Optional, Dict, Any


def utc_timestamp() -> str:
    """Timestamp in the same shape SQLite's datetime('now') produces"""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class User:
    """Journal account"""
    id: Optional[int] = None
    username: str = ""
    password_hash: str = ""
    sec_q: int = 0
    sec_a: str = ""
    is_admin: bool = False
    created_at: str = field(default_factory=utc_timestamp)

    def __post_init__(self):
        # SQLite hands booleans back as 0/1
        self.is_admin = bool(self.is_admin)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create instance from a storage row, ignoring unknown columns"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            "id": self.id,
            "username": self.username,
            "password_hash": self.password_hash,
            "sec_q": self.sec_q,
            "sec_a": self.sec_a,
            "is_admin": self.is_admin,
            "created_at": self.created_at,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Fields safe to hand to the admin listing"""
        return {
            "id": self.id,
            "username": self.username,
            "created_at": self.created_at,
        }
