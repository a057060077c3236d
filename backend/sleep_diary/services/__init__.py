from .auth_service import AuthenticationService
from .credential_store import CredentialStore, normalize_answer, normalize_username
from .entry_store import EntryStore
from .recovery_service import SECURITY_QUESTIONS, RecoveryService
from .session_issuer import Identity, SessionIssuer

__all__ = [
    "AuthenticationService",
    "CredentialStore",
    "EntryStore",
    "Identity",
    "RecoveryService",
    "SECURITY_QUESTIONS",
    "SessionIssuer",
    "normalize_answer",
    "normalize_username"
]
