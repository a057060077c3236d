from .auth import (
    RegisterRequest,
    LoginRequest,
    SessionResponse,
    RecoverQuestionRequest,
    RecoverQuestionResponse,
    RecoverVerifyRequest,
    ChangePasswordRequest,
    AdminResetPasswordRequest,
    SecurityQuestionsResponse
)
from .entry import (
    EntryUpsert,
    EntryResponse,
    AdminUserResponse
)
from .common import (
    OkResponse,
    ErrorResponse,
    HealthResponse
)

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "SessionResponse",
    "RecoverQuestionRequest",
    "RecoverQuestionResponse",
    "RecoverVerifyRequest",
    "ChangePasswordRequest",
    "AdminResetPasswordRequest",
    "SecurityQuestionsResponse",

    # Entry schemas
    "EntryUpsert",
    "EntryResponse",
    "AdminUserResponse",

    # Common schemas
    "OkResponse",
    "ErrorResponse",
    "HealthResponse"
]
