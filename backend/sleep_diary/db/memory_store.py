import asyncio
import json
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import JournalStore
from ..core.exceptions import Conflict, NotFound
from ..models import Entry, User

logger = logging.getLogger(__name__)


class MemorySnapshotStore(JournalStore):
    """
    Memory-resident store persisted as a JSON snapshot.

    Every mutation runs under one ``asyncio.Lock`` so check-and-write steps
    (username uniqueness, the (user_id, date) upsert) are atomic. The
    snapshot is written on a fixed interval and once more on ``close``;
    anything written after the last flush is lost if the process dies.
    """

    backend_name = "memory"

    def __init__(self, snapshot_path: Optional[str] = None, flush_interval: float = 30.0):
        self.snapshot_path = Path(snapshot_path) if snapshot_path else None
        self.flush_interval = flush_interval
        self._users: Dict[int, User] = {}
        self._entries: Dict[int, Entry] = {}
        self._next_user_id = 1
        self._next_entry_id = 1
        self._lock = asyncio.Lock()
        self._dirty = False
        self._flush_task: Optional[asyncio.Task] = None

    async def initialize(self):
        if self.snapshot_path and self.snapshot_path.exists():
            await asyncio.to_thread(self._load_snapshot)
            logger.info(
                f"Loaded snapshot {self.snapshot_path}: "
                f"{len(self._users)} users, {len(self._entries)} entries"
            )

        if self.snapshot_path and self.flush_interval > 0:
            self._flush_task = asyncio.create_task(self._flush_loop())

    async def close(self):
        if self._flush_task:
            self._flush_task.cancel()
            try:
                await self._flush_task
            except asyncio.CancelledError:
                pass
            self._flush_task = None

        # Graceful shutdown always flushes, dirty or not
        await self.flush(force=True)

    # Snapshot persistence

    def _load_snapshot(self):
        with self.snapshot_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)

        self._users = {row["id"]: User.from_dict(row) for row in payload.get("users", [])}
        self._entries = {row["id"]: Entry.from_dict(row) for row in payload.get("entries", [])}
        self._next_user_id = payload.get("next_user_id", max(self._users, default=0) + 1)
        self._next_entry_id = payload.get("next_entry_id", max(self._entries, default=0) + 1)

    def _write_snapshot(self, payload: Dict[str, Any]):
        self.snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.snapshot_path.with_suffix(self.snapshot_path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        os.replace(tmp_path, self.snapshot_path)

    async def flush(self, force: bool = False) -> bool:
        """Write the snapshot file; returns whether anything was written"""
        if not self.snapshot_path:
            return False

        async with self._lock:
            if not (self._dirty or force):
                return False
            payload = {
                "next_user_id": self._next_user_id,
                "next_entry_id": self._next_entry_id,
                "users": [u.to_dict() for u in self._users.values()],
                "entries": [e.to_dict() for e in self._entries.values()],
            }
            self._dirty = False

        try:
            await asyncio.to_thread(self._write_snapshot, payload)
        except Exception:
            async with self._lock:
                self._dirty = True
            raise

        logger.debug(f"Snapshot flushed to {self.snapshot_path}")
        return True

    async def _flush_loop(self):
        logger.info(f"Started snapshot flush loop ({self.flush_interval}s)")

        while True:
            try:
                await asyncio.sleep(self.flush_interval)
                await self.flush()
            except asyncio.CancelledError:
                logger.info("Snapshot flush loop cancelled")
                raise
            except Exception as e:
                logger.error(f"Error flushing snapshot: {e}")

    # Users

    async def create_user(self, user: User) -> User:
        async with self._lock:
            if any(u.username == user.username for u in self._users.values()):
                raise Conflict("Username already taken.")

            stored = deepcopy(user)
            stored.id = self._next_user_id
            self._next_user_id += 1
            self._users[stored.id] = stored
            self._dirty = True

        user.id = stored.id
        return user

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return deepcopy(user)
        return None

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        user = self._users.get(user_id)
        return deepcopy(user) if user else None

    async def update_password_hash(self, username: str, password_hash: str) -> bool:
        async with self._lock:
            for user in self._users.values():
                if user.username == username:
                    user.password_hash = password_hash
                    self._dirty = True
                    return True
        return False

    async def list_non_admin_users(self) -> List[User]:
        return [
            deepcopy(user)
            for user_id, user in sorted(self._users.items())
            if not user.is_admin
        ]

    async def delete_user(self, user_id: int) -> bool:
        async with self._lock:
            if self._users.pop(user_id, None) is None:
                return False
            self._entries = {
                entry_id: entry
                for entry_id, entry in self._entries.items()
                if entry.user_id != user_id
            }
            self._dirty = True
        return True

    # Entries

    async def upsert_entry(self, entry: Entry) -> None:
        async with self._lock:
            if entry.user_id not in self._users:
                raise NotFound("User not found.")

            existing = next(
                (e for e in self._entries.values()
                 if e.user_id == entry.user_id and e.date == entry.date),
                None
            )

            stored = deepcopy(entry)
            if existing:
                stored.id = existing.id
                stored.created_at = existing.created_at
            else:
                stored.id = self._next_entry_id
                self._next_entry_id += 1

            self._entries[stored.id] = stored
            self._dirty = True

    async def list_entries(self, user_id: int) -> List[Entry]:
        entries = [deepcopy(e) for e in self._entries.values() if e.user_id == user_id]
        entries.sort(key=lambda e: e.date, reverse=True)
        return entries

    async def delete_entry(self, entry_id: int, user_id: int) -> bool:
        async with self._lock:
            entry = self._entries.get(entry_id)
            if not entry or entry.user_id != user_id:
                return False
            del self._entries[entry_id]
            self._dirty = True
        return True
