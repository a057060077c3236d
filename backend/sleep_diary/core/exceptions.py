"""
Domain exceptions for the sleep diary core.

Each exception carries the HTTP status it maps to; the API layer turns them
into ``{"error": message}`` responses.
"""

from typing import Optional


class SleepDiaryError(Exception):
    """Base exception for all domain failures"""
    status_code = 500
    default_message = "Internal server error."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(SleepDiaryError):
    """Raised for missing or malformed fields and weak passwords"""
    status_code = 400
    default_message = "Missing fields."


class Unauthorized(SleepDiaryError):
    """Raised for bad credentials, bad tokens and wrong recovery answers"""
    status_code = 401
    default_message = "Unauthorized."


class Forbidden(SleepDiaryError):
    """Raised when an authenticated identity lacks the admin role"""
    status_code = 403
    default_message = "Admin access required."


class NotFound(SleepDiaryError):
    """Raised when a user cannot be found for recovery or reset"""
    status_code = 404
    default_message = "User not found."


class Conflict(SleepDiaryError):
    """Raised when a username is already taken"""
    status_code = 409
    default_message = "Username already taken."


class StoreNotReady(SleepDiaryError):
    """Raised while the store is still initializing; the client may retry"""
    status_code = 503
    default_message = "Storage is starting up, retry shortly."


class StoreFailed(SleepDiaryError):
    """Raised when store initialization failed; fatal to the process"""
    status_code = 500
    default_message = "Storage initialization failed."
