import logging
from typing import Any, Dict

from ..core.exceptions import InvalidInput, NotFound, Unauthorized
from ..models import User
from .credential_store import CredentialStore
from .session_issuer import Identity, SessionIssuer

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Registration, login and password rotation on top of the credential store"""

    def __init__(self, credentials: CredentialStore, issuer: SessionIssuer):
        self.credentials = credentials
        self.issuer = issuer

    def _session_payload(self, user: User) -> Dict[str, Any]:
        return {
            "token": self.issuer.issue(user.id, user.username, user.is_admin),
            "username": user.username,
            "isAdmin": user.is_admin,
        }

    async def register_user(
        self,
        username: str,
        password: str,
        sec_q: int,
        sec_a: str
    ) -> Dict[str, Any]:
        """Create the account and sign it in straight away"""
        user_id = await self.credentials.create(username, password, sec_q, sec_a)
        user = await self.credentials.find_by_id(user_id)
        return self._session_payload(user)

    async def authenticate_password(self, username: str, password: str) -> Dict[str, Any]:
        """Login; unknown users and wrong passwords fail the same way"""
        if not username or not password:
            raise InvalidInput("Missing fields.")

        user = await self.credentials.find_by_username(username)
        if not user or not await self.credentials.verify_password(user, password):
            logger.warning(f"Failed login for {username.strip().lower()}")
            raise Unauthorized("Invalid username or password.")

        return self._session_payload(user)

    async def change_password(self, identity: Identity, current_password: str, new_password: str):
        """Change password with current password verification"""
        if not current_password or not new_password:
            raise InvalidInput("Missing fields.")
        self.credentials.validate_password(new_password)

        user = await self.credentials.find_by_id(identity.user_id)
        if not user:
            raise Unauthorized("Invalid or expired token.")

        if not await self.credentials.verify_password(user, current_password):
            raise Unauthorized("Current password is incorrect.")

        await self.credentials.update_password(user.username, new_password)

    async def reset_user_password(self, username: str, new_password: str):
        """Admin override, no knowledge of the old password needed"""
        if not username:
            raise InvalidInput("Missing fields.")
        self.credentials.validate_password(new_password)

        user = await self.credentials.find_by_username(username)
        if not user:
            raise NotFound("User not found.")

        await self.credentials.update_password(user.username, new_password)
        logger.info(f"Admin reset the password of {user.username}")
