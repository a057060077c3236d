from fastapi import APIRouter, Depends
from typing import List

from ..schemas import EntryUpsert, EntryResponse, OkResponse
from ...auth.dependencies import get_current_account, get_entry_store
from ...services import EntryStore, Identity

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("", response_model=List[EntryResponse])
async def list_entries(
    identity: Identity = Depends(get_current_account),
    entries: EntryStore = Depends(get_entry_store)
):
    """All entries of the current user, newest date first"""
    return [entry.to_dict() for entry in await entries.list_for_user(identity.user_id)]


@router.post("", response_model=OkResponse)
async def upsert_entry(
    request: EntryUpsert,
    identity: Identity = Depends(get_current_account),
    entries: EntryStore = Depends(get_entry_store)
):
    """Save the entry for a date, replacing any earlier one for that date"""
    await entries.upsert(
        user_id=identity.user_id,
        date=request.date,
        bed_time=request.bed_time,
        wake_time=request.wake_time,
        duration=request.duration,
        screen_time=request.screen_time,
        energy=request.energy,
        notes=request.notes
    )
    return OkResponse()


@router.delete("/{entry_id}", response_model=OkResponse)
async def delete_entry(
    entry_id: int,
    identity: Identity = Depends(get_current_account),
    entries: EntryStore = Depends(get_entry_store)
):
    """Delete an entry; ids that are missing or not yours succeed silently"""
    await entries.delete(entry_id, identity.user_id)
    return OkResponse()
