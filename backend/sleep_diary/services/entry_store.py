import logging
import math
import re
from datetime import date as date_cls
from typing import List, Optional

from ..core.exceptions import InvalidInput
from ..db import JournalStore
from ..models import Entry

logger = logging.getLogger(__name__)

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _require_text(value: Optional[str], name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"Missing field: {name}.")
    return value.strip()


def _require_hours(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"Missing field: {name}.")
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be a finite number.")
    if value < 0:
        raise InvalidInput(f"{name} cannot be negative.")
    return float(value)


class EntryStore:
    """Per-user, per-date sleep entries"""

    def __init__(self, store: JournalStore):
        self.store = store

    async def upsert(
        self,
        user_id: int,
        date: str,
        bed_time: str,
        wake_time: str,
        duration: float,
        screen_time: float,
        energy: int,
        notes: Optional[str] = ""
    ) -> None:
        """Insert the entry for (user_id, date) or replace the one already there"""
        date = _require_text(date, "date")
        if not ISO_DATE.match(date):
            raise InvalidInput("Date must be formatted as YYYY-MM-DD.")
        try:
            date = date_cls.fromisoformat(date).isoformat()
        except ValueError:
            raise InvalidInput("Date must be formatted as YYYY-MM-DD.")

        if isinstance(energy, bool) or not isinstance(energy, int):
            raise InvalidInput("Missing field: energy.")

        entry = Entry(
            user_id=user_id,
            date=date,
            bed_time=_require_text(bed_time, "bedTime"),
            wake_time=_require_text(wake_time, "wakeTime"),
            duration=_require_hours(duration, "duration"),
            screen_time=_require_hours(screen_time, "screenTime"),
            energy=energy,
            notes=notes or "",
        )
        await self.store.upsert_entry(entry)

    async def list_for_user(self, user_id: int) -> List[Entry]:
        return await self.store.list_entries(user_id)

    async def delete(self, entry_id: int, user_id: int) -> None:
        # Missing and foreign ids look the same to the caller
        deleted = await self.store.delete_entry(entry_id, user_id)
        if deleted:
            logger.debug(f"Deleted entry {entry_id} for user {user_id}")
