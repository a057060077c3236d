from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from ..core.exceptions import Unauthorized


@dataclass(frozen=True)
class Identity:
    """Claims carried by a validated bearer token"""
    user_id: int
    username: str
    is_admin: bool


class SessionIssuer:
    """Stateless signed bearer tokens; rotating the secret revokes them all"""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(days=7)):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, username: str, is_admin: bool) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "id": user_id,
            "username": username,
            "isAdmin": bool(is_admin),
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def validate(self, token: Optional[str]) -> Identity:
        if not token:
            raise Unauthorized("No token provided.")

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise Unauthorized("Invalid or expired token.") from exc

        user_id = payload.get("id")
        username = payload.get("username")
        if not isinstance(user_id, int) or not isinstance(username, str):
            raise Unauthorized("Invalid or expired token.")

        return Identity(
            user_id=user_id,
            username=username,
            is_admin=bool(payload.get("isAdmin", False))
        )
