from fastapi import Depends, Request

from ..core.config import Settings
from ..core.exceptions import Forbidden, Unauthorized
from ..db import JournalStore
from ..services import (
    AuthenticationService,
    CredentialStore,
    EntryStore,
    Identity,
    RecoveryService,
    SECURITY_QUESTIONS,
    SessionIssuer
)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> JournalStore:
    """Current store; raises StoreNotReady/StoreFailed until it is usable"""
    return request.app.state.store_handle.store


def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer


def get_credential_store(
    store: JournalStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
) -> CredentialStore:
    return CredentialStore(
        store,
        rounds=settings.BCRYPT_ROUNDS,
        min_password_length=settings.MIN_PASSWORD_LENGTH,
        admin_username=settings.ADMIN_USERNAME,
        question_count=len(SECURITY_QUESTIONS)
    )


def get_entry_store(store: JournalStore = Depends(get_store)) -> EntryStore:
    return EntryStore(store)


def get_auth_service(
    credentials: CredentialStore = Depends(get_credential_store),
    issuer: SessionIssuer = Depends(get_session_issuer)
) -> AuthenticationService:
    return AuthenticationService(credentials, issuer)


def get_recovery_service(
    credentials: CredentialStore = Depends(get_credential_store)
) -> RecoveryService:
    return RecoveryService(credentials)


async def get_current_user(
    request: Request,
    issuer: SessionIssuer = Depends(get_session_issuer)
) -> Identity:
    """
    Dependency that validates the bearer token.
    Use this on all protected endpoints.
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header:
        raise Unauthorized("No token provided.")

    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Invalid or expired token.")

    return issuer.validate(token.strip())


async def require_admin(identity: Identity = Depends(get_current_user)) -> Identity:
    """Dependency for admin-only endpoints, layered on get_current_user"""
    if not identity.is_admin:
        raise Forbidden("Admin access required.")
    return identity


async def get_current_account(
    identity: Identity = Depends(get_current_user),
    credentials: CredentialStore = Depends(get_credential_store)
) -> Identity:
    """Like get_current_user, but rejects tokens whose account was deleted"""
    if not await credentials.find_by_id(identity.user_id):
        raise Unauthorized("Invalid or expired token.")
    return identity
