from .user import User
from .entry import Entry

__all__ = [
    "User",
    "Entry"
]
