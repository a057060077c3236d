import logging
import secrets

from ..core.exceptions import NotFound, Unauthorized
from ..models import User
from .credential_store import CredentialStore, normalize_answer

logger = logging.getLogger(__name__)

SECURITY_QUESTIONS = [
    "What was the name of your first pet?",
    "What is your mother's maiden name?",
    "What city were you born in?",
    "What was the name of your primary school?",
    "What is your favourite book?",
]


class RecoveryService:
    """
    Two-step password reset through the user's security question.

    Nothing is stored between the steps; the client sends the username both
    times. The admin account is never recoverable this way. Attempts are not
    rate limited.
    """

    def __init__(self, credentials: CredentialStore):
        self.credentials = credentials

    async def _recoverable_user(self, username: str) -> User:
        user = await self.credentials.find_by_username(username)
        if not user or user.is_admin:
            raise NotFound("User not found.")
        if not user.sec_a:
            raise NotFound("No security question set.")
        return user

    async def get_question(self, username: str) -> str:
        user = await self._recoverable_user(username)
        # An out-of-range index is a data error and should surface as one
        return SECURITY_QUESTIONS[user.sec_q]

    async def verify_and_reset(self, username: str, answer: str, new_password: str):
        self.credentials.validate_password(new_password)
        user = await self._recoverable_user(username)

        given = normalize_answer(answer).encode("utf-8")
        if not secrets.compare_digest(given, user.sec_a.encode("utf-8")):
            logger.warning(f"Wrong recovery answer for {user.username}")
            raise Unauthorized("Incorrect answer.")

        await self.credentials.update_password(user.username, new_password)
        logger.info(f"Password recovered for {user.username}")
