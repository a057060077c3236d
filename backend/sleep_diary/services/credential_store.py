import asyncio
import bcrypt
import logging
from typing import List, Optional

from ..core.exceptions import Conflict, InvalidInput, NotFound
from ..db import JournalStore
from ..models import User

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72


def normalize_username(username: Optional[str]) -> str:
    return (username or "").strip().lower()


def normalize_answer(answer: Optional[str]) -> str:
    return (answer or "").strip().lower()


class CredentialStore:
    """Owns user records and password hashes"""

    def __init__(
        self,
        store: JournalStore,
        rounds: int = 10,
        min_password_length: int = 4,
        admin_username: str = "admin",
        question_count: int = 5
    ):
        self.store = store
        self.rounds = rounds
        self.min_password_length = min_password_length
        self.admin_username = admin_username
        self.question_count = question_count

    def _hash_password(self, password: str) -> str:
        """Hash password using bcrypt"""
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def _check_password(self, password: str, hashed: str) -> bool:
        """Verify password against hash"""
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
        except (ValueError, TypeError):
            # Malformed stored hash or over-long candidate
            return False

    def validate_password(self, password: Optional[str]):
        if not password or len(password) < self.min_password_length:
            raise InvalidInput(
                f"Password must be at least {self.min_password_length} characters."
            )
        if len(password.encode('utf-8')) > BCRYPT_MAX_BYTES:
            raise InvalidInput(f"Password must be at most {BCRYPT_MAX_BYTES} bytes.")

    async def hash_password(self, password: str) -> str:
        # bcrypt is CPU bound, keep it off the event loop
        return await asyncio.to_thread(self._hash_password, password)

    async def create(
        self,
        username: str,
        password: str,
        sec_q: int = 0,
        sec_a: str = ""
    ) -> int:
        """Register a new non-admin user and return its id"""
        username = normalize_username(username)
        if not username:
            raise InvalidInput("Missing fields.")
        if username == self.admin_username:
            raise InvalidInput("Username not allowed.")
        self.validate_password(password)
        if not 0 <= sec_q < self.question_count:
            raise InvalidInput("Unknown security question.")

        # Cheap early exit; the store still enforces uniqueness atomically
        if await self.store.get_user_by_username(username):
            raise Conflict("Username already taken.")

        user = User(
            username=username,
            password_hash=await self.hash_password(password),
            sec_q=sec_q,
            sec_a=normalize_answer(sec_a),
        )
        user = await self.store.create_user(user)
        logger.info(f"Registered user {username} (id={user.id})")
        return user.id

    async def find_by_username(self, username: str) -> Optional[User]:
        return await self.store.get_user_by_username(normalize_username(username))

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.store.get_user_by_id(user_id)

    async def verify_password(self, user: User, candidate: str) -> bool:
        """Constant-time check of ``candidate`` against the stored hash"""
        if not candidate:
            return False
        return await asyncio.to_thread(self._check_password, candidate, user.password_hash)

    async def update_password(self, username: str, new_password: str):
        self.validate_password(new_password)
        username = normalize_username(username)

        new_hash = await self.hash_password(new_password)
        if not await self.store.update_password_hash(username, new_hash):
            raise NotFound("User not found.")
        logger.info(f"Password updated for {username}")

    async def list_non_admin(self) -> List[User]:
        return await self.store.list_non_admin_users()

    async def delete(self, user_id: int):
        """Delete a user and, through the store, all of their entries"""
        user = await self.store.get_user_by_id(user_id)
        if not user:
            raise NotFound("User not found.")
        if user.is_admin:
            raise InvalidInput("The admin account cannot be deleted.")

        await self.store.delete_user(user_id)
        logger.info(f"Deleted user {user.username} (id={user_id})")

    async def seed_admin(self, default_password: str) -> bool:
        """
        Create the reserved admin account on first boot.

        The default password is a known-weak bootstrap value; whoever deploys
        is expected to rotate it through the admin reset or change-password
        endpoints. Returns True when the account was created.
        """
        if await self.store.get_user_by_username(self.admin_username):
            return False

        admin = User(
            username=self.admin_username,
            password_hash=await self.hash_password(default_password),
            is_admin=True,
        )
        try:
            await self.store.create_user(admin)
        except Conflict:
            # Another worker seeded it first
            return False

        logger.warning(
            f"Admin account created: {self.admin_username} with the default password. "
            "This password is insecure, change it now."
        )
        return True
