from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Entry, User


class JournalStore(ABC):
    """
    Storage contract shared by every backend.

    Application code only talks to this interface; backends are picked by
    configuration in ``create_store`` and must keep these guarantees:

    * ``create_user`` raises ``Conflict`` for a taken username, atomically.
    * ``upsert_entry`` is an atomic insert-or-replace on ``(user_id, date)``
      that keeps the original ``id`` and ``created_at``.
      It raises ``NotFound`` when the owning user does not exist.
    * ``delete_user`` removes every entry owned by that user.
    * A mutation is durable (or, for snapshot backends, queued for the next
      flush) before the call returns.
    """

    backend_name = "abstract"

    @abstractmethod
    async def initialize(self):
        """Open connections, create schema, load snapshots"""

    @abstractmethod
    async def close(self):
        """Flush and release resources"""

    # Users

    @abstractmethod
    async def create_user(self, user: User) -> User:
        ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    async def update_password_hash(self, username: str, password_hash: str) -> bool:
        """Replace a user's hash; returns False when no such user exists"""

    @abstractmethod
    async def list_non_admin_users(self) -> List[User]:
        """Non-admin users in creation order"""

    @abstractmethod
    async def delete_user(self, user_id: int) -> bool:
        ...

    # Entries

    @abstractmethod
    async def upsert_entry(self, entry: Entry) -> None:
        ...

    @abstractmethod
    async def list_entries(self, user_id: int) -> List[Entry]:
        """Entries for one user, newest date first"""

    @abstractmethod
    async def delete_entry(self, entry_id: int, user_id: int) -> bool:
        """Delete only when owned by ``user_id``; returns whether a row went away"""
