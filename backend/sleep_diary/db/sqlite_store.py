import logging
import aiosqlite
from typing import List, Optional

from .base import JournalStore
from .database import Database
from ..core.exceptions import Conflict, NotFound
from ..models import Entry, User

logger = logging.getLogger(__name__)


class SQLiteStore(JournalStore):
    """File-backed store on a single aiosqlite connection"""

    backend_name = "sqlite"

    def __init__(self, db_path: str):
        self.db = Database(db_path)

    async def initialize(self):
        await self.db.connect()
        await self.db.create_tables()
        logger.info(f"SQLite store ready at {self.db.db_path}")

    async def close(self):
        await self.db.disconnect()

    async def create_user(self, user: User) -> User:
        try:
            async with self.db.transaction():
                cursor = await self.db.execute(
                    """INSERT INTO users (username, password_hash, sec_q, sec_a, is_admin, created_at)
                       VALUES (?, ?, ?, ?, ?, ?)""",
                    (user.username, user.password_hash, user.sec_q, user.sec_a,
                     int(user.is_admin), user.created_at)
                )
        except aiosqlite.IntegrityError as e:
            if "username" in str(e):
                raise Conflict("Username already taken.")
            raise

        user.id = cursor.lastrowid
        return user

    async def get_user_by_username(self, username: str) -> Optional[User]:
        row = await self.db.fetch_one(
            "SELECT * FROM users WHERE username = ?", (username,)
        )
        return User.from_dict(row) if row else None

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        row = await self.db.fetch_one(
            "SELECT * FROM users WHERE id = ?", (user_id,)
        )
        return User.from_dict(row) if row else None

    async def update_password_hash(self, username: str, password_hash: str) -> bool:
        async with self.db.transaction():
            cursor = await self.db.execute(
                "UPDATE users SET password_hash = ? WHERE username = ?",
                (password_hash, username)
            )
        return cursor.rowcount > 0

    async def list_non_admin_users(self) -> List[User]:
        rows = await self.db.fetch_all(
            "SELECT * FROM users WHERE is_admin = 0 ORDER BY id ASC"
        )
        return [User.from_dict(row) for row in rows]

    async def delete_user(self, user_id: int) -> bool:
        # entries go with it through ON DELETE CASCADE
        async with self.db.transaction():
            cursor = await self.db.execute(
                "DELETE FROM users WHERE id = ?", (user_id,)
            )
        return cursor.rowcount > 0

    async def upsert_entry(self, entry: Entry) -> None:
        try:
            async with self.db.transaction():
                await self.db.execute(
                    """INSERT INTO entries (user_id, date, bed_time, wake_time, duration,
                                            screen_time, energy, notes, created_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                       ON CONFLICT(user_id, date) DO UPDATE SET
                           bed_time    = excluded.bed_time,
                           wake_time   = excluded.wake_time,
                           duration    = excluded.duration,
                           screen_time = excluded.screen_time,
                           energy      = excluded.energy,
                           notes       = excluded.notes""",
                    (entry.user_id, entry.date, entry.bed_time, entry.wake_time,
                     entry.duration, entry.screen_time, entry.energy, entry.notes,
                     entry.created_at)
                )
        except aiosqlite.IntegrityError as e:
            if "FOREIGN KEY" in str(e):
                raise NotFound("User not found.")
            raise

    async def list_entries(self, user_id: int) -> List[Entry]:
        rows = await self.db.fetch_all(
            "SELECT * FROM entries WHERE user_id = ? ORDER BY date DESC",
            (user_id,)
        )
        return [Entry.from_dict(row) for row in rows]

    async def delete_entry(self, entry_id: int, user_id: int) -> bool:
        async with self.db.transaction():
            cursor = await self.db.execute(
                "DELETE FROM entries WHERE id = ? AND user_id = ?",
                (entry_id, user_id)
            )
        return cursor.rowcount > 0
