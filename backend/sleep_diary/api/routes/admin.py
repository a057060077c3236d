import logging
from fastapi import APIRouter, Depends
from typing import List

from ..schemas import AdminResetPasswordRequest, AdminUserResponse, OkResponse
from ...auth.dependencies import (
    get_auth_service,
    get_credential_store,
    get_entry_store,
    require_admin
)
from ...services import AuthenticationService, CredentialStore, EntryStore, Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=List[AdminUserResponse])
async def list_users(
    admin: Identity = Depends(require_admin),
    credentials: CredentialStore = Depends(get_credential_store),
    entries: EntryStore = Depends(get_entry_store)
):
    """Every non-admin user with all of their entries"""
    users = []
    for user in await credentials.list_non_admin():
        user_entries = await entries.list_for_user(user.id)
        users.append({
            **user.to_public_dict(),
            "entries": [entry.to_dict() for entry in user_entries]
        })
    return users


@router.post("/reset-password", response_model=OkResponse)
async def reset_password(
    request: AdminResetPasswordRequest,
    admin: Identity = Depends(require_admin),
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    await auth_service.reset_user_password(request.username, request.new_password)
    return OkResponse()


@router.delete("/users/{user_id}", response_model=OkResponse)
async def delete_user(
    user_id: int,
    admin: Identity = Depends(require_admin),
    credentials: CredentialStore = Depends(get_credential_store)
):
    """Remove a user together with all of their entries"""
    await credentials.delete(user_id)
    logger.info(f"User {user_id} deleted by {admin.username}")
    return OkResponse()
